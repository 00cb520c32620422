"""Tests for the records API client."""

import asyncio

import httpx
import pytest

from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.record.gateway import RecordGateway, collection_key, item_key
from staffdesk.core.modules.record.models import AuthToken
from staffdesk.errors import NotFoundError, UpstreamError

TOKEN = AuthToken("tok-123")


def make_gateway(handler):
    return RecordGateway("http://records.test/", transport=httpx.MockTransport(handler))


class TestKeys:
    @pytest.mark.parametrize(
        ("entity_type", "collection", "item"),
        [
            (EntityType.JOB_SEEKERS, "jobSeekers", "jobSeeker"),
            (EntityType.HIRING_MANAGERS, "hiringManagers", "hiringManager"),
            (EntityType.ORGANIZATIONS, "organizations", "organization"),
            (EntityType.TASKS, "tasks", "task"),
        ],
    )
    def test_response_keys(self, entity_type, collection, item):
        assert collection_key(entity_type) == collection
        assert item_key(entity_type) == item


class TestRequests:
    def test_bearer_token_and_path(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"jobSeeker": {"id": 5}})

        asyncio.run(make_gateway(handler).get_record(TOKEN, EntityType.JOB_SEEKERS, 5))

        assert seen[0].headers["Authorization"] == "Bearer tok-123"
        assert seen[0].url.path == "/api/job-seekers/5"
        assert seen[0].method == "GET"

    def test_find_by_sends_query(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"organizations": [{"id": 1, "name": "Acme"}]})

        matches = asyncio.run(make_gateway(handler).find_by(TOKEN, EntityType.ORGANIZATIONS, "name", "Acme"))

        assert matches == [{"id": 1, "name": "Acme"}]
        assert seen[0].url.params["name"] == "Acme"

    def test_create_posts_json(self):
        def handler(request):
            assert request.method == "POST"
            assert request.url.path == "/api/jobs"
            return httpx.Response(201, json={"job": {"id": 3, "job_title": "Welder"}})

        created = asyncio.run(make_gateway(handler).create_record(TOKEN, EntityType.JOBS, {"job_title": "Welder"}))
        assert created == {"id": 3, "job_title": "Welder"}

    def test_delete_accepts_empty_body(self):
        def handler(request):
            assert request.method == "DELETE"
            return httpx.Response(204)

        assert asyncio.run(make_gateway(handler).delete_record(TOKEN, EntityType.LEADS, 8)) is None


class TestUnwrap:
    @pytest.mark.parametrize(
        "body",
        [
            [{"id": 1}],
            {"jobSeekers": [{"id": 1}]},
            {"job-seekers": [{"id": 1}]},
            {"data": [{"id": 1}]},
        ],
    )
    def test_list_shapes(self, body):
        gateway = make_gateway(lambda request: httpx.Response(200, json=body))
        assert asyncio.run(gateway.list_records(TOKEN, EntityType.JOB_SEEKERS)) == [{"id": 1}]

    def test_unknown_list_shape_is_empty(self):
        gateway = make_gateway(lambda request: httpx.Response(200, json={"total": 0}))
        assert asyncio.run(gateway.list_records(TOKEN, EntityType.JOB_SEEKERS)) == []

    @pytest.mark.parametrize("body", [{"jobSeeker": {"id": 1}}, {"data": {"id": 1}}, {"id": 1}])
    def test_item_shapes(self, body):
        gateway = make_gateway(lambda request: httpx.Response(200, json=body))
        assert asyncio.run(gateway.get_record(TOKEN, EntityType.JOB_SEEKERS, 1)) == {"id": 1}


class TestErrors:
    def test_missing_record(self):
        gateway = make_gateway(lambda request: httpx.Response(404, json={"message": "Job seeker not found"}))
        with pytest.raises(NotFoundError, match="Job seeker not found"):
            asyncio.run(gateway.get_record(TOKEN, EntityType.JOB_SEEKERS, 99))

    def test_server_message_is_surfaced(self):
        gateway = make_gateway(lambda request: httpx.Response(500, json={"message": "Database offline"}))
        with pytest.raises(UpstreamError, match="Database offline") as exc_info:
            asyncio.run(gateway.create_record(TOKEN, EntityType.JOBS, {}))
        assert exc_info.value.status_code == 500

    def test_status_used_when_body_is_not_json(self):
        gateway = make_gateway(lambda request: httpx.Response(401, text="nope"))
        with pytest.raises(UpstreamError, match="Records API returned 401"):
            asyncio.run(gateway.list_records(TOKEN, EntityType.JOBS))

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamError, match="Records API unreachable"):
            asyncio.run(make_gateway(handler).list_records(TOKEN, EntityType.JOBS))
