from typing import Annotated

import pydantic
from fastapi import APIRouter, Form, UploadFile

from staffdesk.core.modules.csvio.parser import decode_csv
from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.importer.models import ImportOptions, ImportPreview, ImportSummary
from staffdesk.errors import ValidationError
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["imports"])

_mapping_adapter = pydantic.TypeAdapter(dict[str, str | None])

FieldMappingsForm = Annotated[
    str | None,
    Form(description='JSON object of CSV header to field name, null to skip a column, e.g. {"First": "firstName"}'),
]


def _parse_mappings(raw: str | None) -> dict[str, str | None] | None:
    if not raw:
        return None
    try:
        return _mapping_adapter.validate_json(raw)
    except pydantic.ValidationError as e:
        raise ValidationError("field_mappings must be a JSON object of header to field name") from e


@router.post(
    "/imports/{entity_type}/preview",
    summary="Preview CSV import",
    description=(
        "Parse an uploaded CSV, suggest a header-to-field mapping (or apply the given one) "
        "and validate every row. Nothing is written."
    ),
    operation_id="previewImport",
    responses={
        200: {"description": "Parsed rows with mapping and per-row errors"},
        400: {"model": ErrorResponse, "description": "Invalid field mappings"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def preview_import(
    entity_type: EntityType,
    file: UploadFile,
    app: AppDep,
    auth_token: AuthTokenDep,
    field_mappings: FieldMappingsForm = None,
) -> ImportPreview:
    text = decode_csv(await file.read())
    return await app.preview_import(auth_token, entity_type, text, _parse_mappings(field_mappings))


@router.post(
    "/imports/{entity_type}",
    summary="Run CSV import",
    description=(
        "Import every row of an uploaded CSV one at a time. Invalid or rejected rows are counted as failed "
        "and never stop the rest. The summary keeps the first per-row errors."
    ),
    operation_id="runImport",
    responses={
        200: {"description": "Import summary"},
        400: {"model": ErrorResponse, "description": "Invalid field mappings"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def run_import(
    entity_type: EntityType,
    file: UploadFile,
    app: AppDep,
    auth_token: AuthTokenDep,
    field_mappings: FieldMappingsForm = None,
    skip_duplicates: Annotated[bool, Form(description="Count rows matching an existing record as failed")] = False,
    update_existing: Annotated[bool, Form(description="Update the matching record instead of creating one")] = False,
) -> ImportSummary:
    text = decode_csv(await file.read())
    options = ImportOptions(skip_duplicates=skip_duplicates, update_existing=update_existing)
    return await app.run_import(auth_token, entity_type, text, _parse_mappings(field_mappings), options)
