from collections.abc import Mapping
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from staffdesk.core.core import Service
from staffdesk.core.modules.csvio.parser import CsvTable, parse_csv
from staffdesk.core.modules.field.models import EntityType, FieldDefinition
from staffdesk.core.modules.importer.mapper import MappedRow, apply_mapping, auto_map
from staffdesk.core.modules.importer.models import ImportOptions, ImportPreview, ImportSummary
from staffdesk.core.modules.record.models import AuthToken
from staffdesk.core.modules.submission.models import Err
from staffdesk.core.modules.submission.packager import package
from staffdesk.errors import UserError

logger = structlog.get_logger(__name__)

# Column used to detect an existing record; entity types without one always create
UNIQUE_COLUMNS: dict[EntityType, str] = {
    EntityType.ORGANIZATIONS: "name",
    EntityType.JOBS: "job_title",
    EntityType.JOB_SEEKERS: "email",
    EntityType.HIRING_MANAGERS: "email",
    EntityType.LEADS: "email",
}


class _RowFailedError(Exception):
    """Internal signal that a row could not be written."""


class ImportService(Service):
    """CSV bulk import, one row at a time through the record gateway."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)

    async def preview(
        self, entity_type: EntityType, text: str, field_mappings: Mapping[str, str | None] | None = None
    ) -> ImportPreview:
        """Parse an upload and suggest (or apply) a mapping without writing anything."""
        fields = await self.core.services.field.load_fields(entity_type)
        table = parse_csv(text)
        mapping = self._resolve_mapping(table, fields, field_mappings)
        rows = apply_mapping(table, mapping, fields)
        return ImportPreview(
            entity_type=entity_type,
            headers=table.headers,
            field_mappings=mapping,
            rows=rows,
            total_rows=len(rows),
            valid_rows=sum(1 for row in rows if row.is_valid),
        )

    async def run_import(
        self,
        auth_token: AuthToken,
        entity_type: EntityType,
        text: str,
        field_mappings: Mapping[str, str | None] | None = None,
        options: ImportOptions | None = None,
    ) -> ImportSummary:
        """Write every valid row sequentially. A failing row never stops the rest."""
        options = options or ImportOptions()
        fields = await self.core.services.field.load_fields(entity_type)
        table = parse_csv(text)
        mapping = self._resolve_mapping(table, fields, field_mappings)
        rows = apply_mapping(table, mapping, fields)

        summary = ImportSummary(total_rows=len(rows))
        error_limit = self.core.config.import_error_limit
        logger.info("import_started", entity_type=entity_type, total_rows=len(rows))

        for row in rows:
            try:
                await self._import_row(auth_token, entity_type, fields, row, options)
            except _RowFailedError as e:
                summary.failed += 1
                if len(summary.errors) < error_limit:
                    summary.errors.append(f"Row {row.row_number}: {e}")
            else:
                summary.successful += 1

        logger.info(
            "import_finished",
            entity_type=entity_type,
            total_rows=summary.total_rows,
            successful=summary.successful,
            failed=summary.failed,
        )
        return summary

    async def _import_row(
        self,
        auth_token: AuthToken,
        entity_type: EntityType,
        fields: list[FieldDefinition],
        row: MappedRow,
        options: ImportOptions,
    ) -> None:
        if row.errors:
            raise _RowFailedError("; ".join(row.errors))

        packaged = package(entity_type, row.mapped, fields)
        if isinstance(packaged, Err):
            raise _RowFailedError(packaged.reason)
        payload = packaged.value.to_payload()
        records = self.core.records

        try:
            existing = await self._find_existing(auth_token, entity_type, payload, options)
            if existing is not None:
                column = UNIQUE_COLUMNS[entity_type]
                if options.skip_duplicates:
                    raise _RowFailedError(f"Record already exists ({column}: {payload[column]})")
                await records.update_record(auth_token, entity_type, existing["id"], payload)
                return
            await records.create_record(auth_token, entity_type, payload)
        except UserError as e:
            raise _RowFailedError(str(e)) from e

    async def _find_existing(
        self, auth_token: AuthToken, entity_type: EntityType, payload: dict[str, Any], options: ImportOptions
    ) -> dict[str, Any] | None:
        """Best-effort duplicate lookup; a failed search means create."""
        if not (options.skip_duplicates or options.update_existing):
            return None
        column = UNIQUE_COLUMNS.get(entity_type)
        if column is None or not payload.get(column):
            return None
        try:
            matches = await self.core.records.find_by(auth_token, entity_type, column, str(payload[column]))
        except UserError as e:
            logger.warning("duplicate_lookup_failed", entity_type=entity_type, column=column, error=str(e))
            return None
        for match in matches:
            if "id" in match:
                return match
        return None

    @staticmethod
    def _resolve_mapping(
        table: CsvTable, fields: list[FieldDefinition], field_mappings: Mapping[str, str | None] | None
    ) -> dict[str, str | None]:
        """User-edited mapping for the table's headers, auto-mapped where no choice was given."""
        suggested = auto_map(table.headers, fields)
        if field_mappings is None:
            return suggested
        known = {field.field_name for field in fields}
        mapping: dict[str, str | None] = {}
        for header in table.headers:
            if header in field_mappings:
                choice = field_mappings[header]
                mapping[header] = choice if choice in known else None
            else:
                mapping[header] = suggested[header]
        return mapping
