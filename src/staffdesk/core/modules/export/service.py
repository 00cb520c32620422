"""Import templates and record exports."""

from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from staffdesk.core.core import Service
from staffdesk.core.modules.export.formatting import (
    build_table,
    build_template,
    matches_filters,
    select_fields,
    template_filename,
    to_csv,
    to_xlsx,
)
from staffdesk.core.modules.export.models import ExportFile, ExportFormat, ExportRequest
from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.record.models import AuthToken
from staffdesk.utils import now

logger = structlog.get_logger(__name__)


class ExportService(Service):
    """Builds downloadable files from field definitions and stored records."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)

    async def get_template(self, entity_type: EntityType) -> ExportFile:
        fields = await self.core.services.field.load_fields(entity_type)
        return ExportFile(
            filename=template_filename(entity_type),
            media_type=ExportFormat.CSV.media_type,
            content=build_template(fields).encode("utf-8"),
        )

    async def export_records(self, auth_token: AuthToken, entity_type: EntityType, request: ExportRequest) -> ExportFile:
        """Fetch, filter, project and render records as CSV or XLSX.

        Filters are passed to the records API and applied again here in case
        the API ignores them.
        """
        filters = request.filters
        params: dict[str, str] = {}
        if filters.start_date:
            params["startDate"] = filters.start_date.isoformat()
        if filters.end_date:
            params["endDate"] = filters.end_date.isoformat()
        if filters.status:
            params["status"] = filters.status

        records = await self.core.records.list_records(auth_token, entity_type, params=params or None)
        records = [record for record in records if matches_filters(record, filters)]
        if request.selected_fields:
            records = [select_fields(record, request.selected_fields) for record in records]

        headers, rows = build_table(records)
        timestamp = now().strftime("%Y%m%d_%H%M%S")
        filename = f"{entity_type.value}_export_{timestamp}.{request.format.value}"
        if request.format == ExportFormat.XLSX:
            content = to_xlsx(headers, rows, title=entity_type.record_type)
        else:
            content = to_csv(headers, rows)

        logger.info("records_exported", entity_type=entity_type, format=request.format, rows=len(rows))
        return ExportFile(filename=filename, media_type=request.format.media_type, content=content)
