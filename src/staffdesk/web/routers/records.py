from typing import Annotated

from fastapi import APIRouter, Body, Response

from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.record.models import RecordValues, SaveResult
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["records"])

_SAVE_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Values could not be packaged"},
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    422: {"description": "Validation failed; the body carries the errors"},
    502: {"model": ErrorResponse, "description": "Records API rejected the submission"},
}

FormValues = Annotated[dict[str, str | bool], Body(description="Values keyed by field name")]


@router.post(
    "/records/{entity_type}",
    summary="Create record",
    description="Validate, package and submit a new record through the records API.",
    operation_id="createRecord",
    status_code=201,
    responses={201: {"description": "Record created"}, **_SAVE_RESPONSES},
)
async def create_record(
    entity_type: EntityType, values: FormValues, app: AppDep, auth_token: AuthTokenDep, response: Response
) -> SaveResult:
    result = await app.save_record(auth_token, entity_type, values)
    if not result.saved:
        response.status_code = 422
    return result


@router.put(
    "/records/{entity_type}/{record_id}",
    summary="Update record",
    description="Validate, package and submit changes. Stored values of hidden fields are kept.",
    operation_id="updateRecord",
    responses={200: {"description": "Record updated"}, 404: {"model": ErrorResponse, "description": "Record not found"}, **_SAVE_RESPONSES},
)
async def update_record(
    entity_type: EntityType, record_id: str, values: FormValues, app: AppDep, auth_token: AuthTokenDep, response: Response
) -> SaveResult:
    result = await app.save_record(auth_token, entity_type, values, record_id)
    if not result.saved:
        response.status_code = 422
    return result


@router.delete(
    "/records/{entity_type}/{record_id}",
    summary="Delete record",
    description="Delete a record through the records API.",
    operation_id="deleteRecord",
    status_code=204,
    responses={
        204: {"description": "Record deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Record not found"},
        502: {"model": ErrorResponse, "description": "Records API error"},
    },
)
async def delete_record(entity_type: EntityType, record_id: str, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_record(auth_token, entity_type, record_id)


@router.get(
    "/records/{entity_type}/{record_id}/values",
    summary="Get record form values",
    description="The record's values keyed by field name, as a form would hold them. Hidden fields included.",
    operation_id="getRecordValues",
    responses={
        200: {"description": "Form values"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Record not found"},
        502: {"model": ErrorResponse, "description": "Records API error"},
    },
)
async def get_record_values(entity_type: EntityType, record_id: str, app: AppDep, auth_token: AuthTokenDep) -> RecordValues:
    return await app.get_record_values(auth_token, entity_type, record_id)
