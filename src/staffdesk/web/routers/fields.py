from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from pydantic import BaseModel

from staffdesk.core.modules.field.models import EntityType, FieldCreate, FieldDefinition, FieldHistoryEntry, FieldUpdate
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["fields"])


class NextFieldName(BaseModel):
    field_name: str


@router.get(
    "/fields/by-id/{field_id}",
    summary="Get field definition",
    description="Get a stored field definition by its id. Standard fields are not stored and cannot be fetched by id.",
    operation_id="getField",
    responses={
        200: {"description": "Field definition"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Field not found"},
    },
)
async def get_field(field_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> FieldDefinition:
    return await app.get_field(auth_token, field_id)


@router.put(
    "/fields/by-id/{field_id}",
    summary="Update field definition",
    description="Partially update a field definition. The field name never changes. Every change is recorded in the field history.",
    operation_id="updateField",
    responses={
        200: {"description": "Field updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid field definition"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Field not found"},
    },
)
async def update_field(field_id: UUID, data: FieldUpdate, app: AppDep, auth_token: AuthTokenDep) -> FieldDefinition:
    return await app.update_field(auth_token, field_id, data)


@router.delete(
    "/fields/by-id/{field_id}",
    summary="Delete field definition",
    description="Delete a field definition. Values already stored in records are left untouched.",
    operation_id="deleteField",
    status_code=204,
    responses={
        204: {"description": "Field deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Field not found"},
    },
)
async def delete_field(field_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_field(auth_token, field_id)


@router.get(
    "/fields/by-id/{field_id}/history",
    summary="Get field history",
    description="Audit trail of a field definition, newest first. Available after the field is deleted.",
    operation_id="getFieldHistory",
    responses={
        200: {"description": "History entries"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_field_history(field_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> list[FieldHistoryEntry]:
    return await app.get_field_history(auth_token, field_id)


@router.get(
    "/fields/{entity_type}",
    summary="List fields",
    description=(
        "Fields for an entity type in display order. Stored definitions shadow standard fields of the same name; "
        "standard fields are used when nothing is stored or the store is unavailable."
    ),
    operation_id="listFields",
    responses={
        200: {"description": "Field definitions"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_fields(
    entity_type: EntityType,
    app: AppDep,
    auth_token: AuthTokenDep,
    include_hidden: Annotated[bool, Query(description="Include hidden fields")] = False,
) -> list[FieldDefinition]:
    return await app.get_fields(auth_token, entity_type, include_hidden)


@router.post(
    "/fields/{entity_type}",
    summary="Create field",
    description="Create a field definition. When field_name is omitted the next Field_<n> name is generated.",
    operation_id="createField",
    status_code=201,
    responses={
        201: {"description": "Field created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid field definition or field name already exists"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_field(entity_type: EntityType, data: FieldCreate, app: AppDep, auth_token: AuthTokenDep) -> FieldDefinition:
    return await app.create_field(auth_token, entity_type, data)


@router.get(
    "/fields/{entity_type}/next-name",
    summary="Get next generated field name",
    description="The name a new field would receive if created without one.",
    operation_id="getNextFieldName",
    responses={
        200: {"description": "Next field name"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_next_field_name(entity_type: EntityType, app: AppDep, auth_token: AuthTokenDep) -> NextFieldName:
    return NextFieldName(field_name=await app.get_next_field_name(auth_token, entity_type))
