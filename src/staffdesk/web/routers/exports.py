from fastapi import APIRouter
from fastapi.responses import Response

from staffdesk.core.modules.export.models import ExportFile, ExportRequest
from staffdesk.core.modules.field.models import EntityType
from staffdesk.web.deps import AppDep, AuthTokenDep
from staffdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["exports"])


def _file_response(export_file: ExportFile) -> Response:
    return Response(
        content=export_file.content,
        media_type=export_file.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_file.filename}"'},
    )


@router.get(
    "/exports/{entity_type}/template",
    summary="Download import template",
    description="CSV with a single header row of the visible field labels, e.g. Job_Seeker_Template.csv.",
    operation_id="getImportTemplate",
    response_class=Response,
    responses={
        200: {"description": "CSV template", "content": {"text/csv": {}}},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_import_template(entity_type: EntityType, app: AppDep, auth_token: AuthTokenDep) -> Response:
    return _file_response(await app.get_import_template(auth_token, entity_type))


@router.post(
    "/exports/{entity_type}",
    summary="Export records",
    description=(
        "Export records as CSV (UTF-8 with BOM, every value quoted) or XLSX. Nested objects are flattened "
        "into '_'-joined columns and arrays are joined with '; '. Optional date and status filters and a "
        "dotted-path field selection apply."
    ),
    operation_id="exportRecords",
    response_class=Response,
    responses={
        200: {
            "description": "Export file",
            "content": {"text/csv": {}, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {}},
        },
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        502: {"model": ErrorResponse, "description": "Records API error"},
    },
)
async def export_records(entity_type: EntityType, request: ExportRequest, app: AppDep, auth_token: AuthTokenDep) -> Response:
    return _file_response(await app.export_records(auth_token, entity_type, request))
