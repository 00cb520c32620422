from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from uuid import UUID

from staffdesk.config import Config
from staffdesk.core.core import Core
from staffdesk.core.modules.export.models import ExportFile, ExportRequest
from staffdesk.core.modules.field.models import (
    EntityType,
    FieldCreate,
    FieldDefinition,
    FieldHistoryEntry,
    FieldUpdate,
    ValidationResult,
)
from staffdesk.core.modules.importer.models import ImportOptions, ImportPreview, ImportSummary
from staffdesk.core.modules.record.gateway import RecordGateway
from staffdesk.core.modules.record.models import AuthToken, RecordForm, RecordId, RecordValues, SaveResult
from staffdesk.errors import AuthenticationError


class App:
    """Facade for all application operations, checks the caller's token before delegating to Core.

    Tokens are not verified here; the records API does that when they are forwarded.
    """

    def __init__(self, config: Config, records: RecordGateway | None = None) -> None:
        self._core = Core(config, records=records)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        return bool(auth_token.strip())

    async def _ensure_authenticated(self, auth_token: AuthToken) -> None:
        if not await self.is_auth_token_valid(auth_token):
            raise AuthenticationError

    # Field definitions

    async def get_fields(self, auth_token: AuthToken, entity_type: EntityType, include_hidden: bool = False) -> list[FieldDefinition]:
        """Registry view of the fields for an entity type."""
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.load_fields(entity_type, include_hidden=include_hidden)

    async def get_field(self, auth_token: AuthToken, field_id: UUID) -> FieldDefinition:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.get_field(field_id)

    async def get_next_field_name(self, auth_token: AuthToken, entity_type: EntityType) -> str:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.get_next_field_name(entity_type)

    async def create_field(self, auth_token: AuthToken, entity_type: EntityType, data: FieldCreate) -> FieldDefinition:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.create_field(entity_type, data)

    async def update_field(self, auth_token: AuthToken, field_id: UUID, data: FieldUpdate) -> FieldDefinition:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.update_field(field_id, data)

    async def delete_field(self, auth_token: AuthToken, field_id: UUID) -> None:
        await self._ensure_authenticated(auth_token)
        await self._core.services.field.delete_field(field_id)

    async def get_field_history(self, auth_token: AuthToken, field_id: UUID) -> list[FieldHistoryEntry]:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.field.get_field_history(field_id)

    # Forms and records

    async def get_form(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId | None = None) -> RecordForm:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.record.get_form(auth_token, entity_type, record_id)

    async def validate_form(self, auth_token: AuthToken, entity_type: EntityType, values: Mapping[str, str]) -> ValidationResult:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.record.validate_form(entity_type, values)

    async def get_record_values(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId) -> RecordValues:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.record.get_values(auth_token, entity_type, record_id)

    async def save_record(
        self,
        auth_token: AuthToken,
        entity_type: EntityType,
        values: Mapping[str, str | bool],
        record_id: RecordId | None = None,
    ) -> SaveResult:
        """Create the record when no id is given, otherwise update it."""
        await self._ensure_authenticated(auth_token)
        return await self._core.services.record.save_record(auth_token, entity_type, values, record_id)

    async def delete_record(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId) -> None:
        await self._ensure_authenticated(auth_token)
        await self._core.services.record.delete_record(auth_token, entity_type, record_id)

    # Bulk import and export

    async def preview_import(
        self, auth_token: AuthToken, entity_type: EntityType, text: str, field_mappings: Mapping[str, str | None] | None = None
    ) -> ImportPreview:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.importer.preview(entity_type, text, field_mappings)

    async def run_import(
        self,
        auth_token: AuthToken,
        entity_type: EntityType,
        text: str,
        field_mappings: Mapping[str, str | None] | None = None,
        options: ImportOptions | None = None,
    ) -> ImportSummary:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.importer.run_import(auth_token, entity_type, text, field_mappings, options)

    async def get_import_template(self, auth_token: AuthToken, entity_type: EntityType) -> ExportFile:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.export.get_template(entity_type)

    async def export_records(self, auth_token: AuthToken, entity_type: EntityType, request: ExportRequest) -> ExportFile:
        await self._ensure_authenticated(auth_token)
        return await self._core.services.export.export_records(auth_token, entity_type, request)

    def get_version(self) -> dict[str, str]:
        """Package version and build metadata. Public."""
        try:
            package_version = version("staffdesk")
        except PackageNotFoundError:
            package_version = "unknown"
        return {
            "version": package_version,
            "git_commit_hash": self._core.config.git_commit_hash,
            "build_time": self._core.config.build_time,
        }
