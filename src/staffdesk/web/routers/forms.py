from typing import Annotated

from fastapi import APIRouter, Body, Query

from staffdesk.core.modules.field.models import EntityType, ValidationResult
from staffdesk.core.modules.record.models import RecordForm
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["forms"])


@router.get(
    "/forms/{entity_type}",
    summary="Render form",
    description=(
        "Input descriptors for every visible field in display order. "
        "Pass record_id to pre-populate the inputs from an existing record."
    ),
    operation_id="getForm",
    responses={
        200: {"description": "Form inputs"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Record not found"},
        502: {"model": ErrorResponse, "description": "Records API error"},
    },
)
async def get_form(
    entity_type: EntityType,
    app: AppDep,
    auth_token: AuthTokenDep,
    record_id: Annotated[str | None, Query(description="Record to pre-populate from")] = None,
) -> RecordForm:
    return await app.get_form(auth_token, entity_type, record_id)


@router.post(
    "/forms/{entity_type}/validate",
    summary="Validate form values",
    description="Check values against the visible fields without saving. Validation failures are returned, not raised.",
    operation_id="validateForm",
    responses={
        200: {"description": "Validation result"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def validate_form(
    entity_type: EntityType,
    values: Annotated[dict[str, str], Body(description="Values keyed by field name")],
    app: AppDep,
    auth_token: AuthTokenDep,
) -> ValidationResult:
    return await app.validate_form(auth_token, entity_type, values)
