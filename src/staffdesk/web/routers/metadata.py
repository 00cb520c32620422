"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from staffdesk.core.modules.field.models import EntityType, FieldType
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/entity-types",
    summary="Get entity types",
    description="Entity types that own a field namespace, mapped to their singular display names.",
    operation_id="getEntityTypes",
    responses={
        200: {"description": "Mapping of entity type to display name"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_entity_types(auth_token: AuthTokenDep) -> dict[EntityType, str]:  # noqa: ARG001
    return {entity_type: entity_type.record_type for entity_type in EntityType}


@router.get(
    "/metadata/field-types",
    summary="Get field types",
    description="Input types a field definition can use.",
    operation_id="getFieldTypes",
    responses={
        200: {"description": "Field types"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_field_types(auth_token: AuthTokenDep) -> list[FieldType]:  # noqa: ARG001
    return list(FieldType)


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns build and version information including package version, git commit hash and build time.",
    operation_id="getVersion",
    responses={200: {"description": "Version and build information"}},
)
async def get_version(app: AppDep) -> dict[str, str]:
    return app.get_version()
