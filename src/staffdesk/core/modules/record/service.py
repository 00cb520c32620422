from collections.abc import Mapping
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from staffdesk.core.core import Service
from staffdesk.core.modules.field.models import EntityType, FieldDefinition, ValidationResult
from staffdesk.core.modules.field.renderer import render_form
from staffdesk.core.modules.field.validators import validate
from staffdesk.core.modules.field.values import FieldValueStore
from staffdesk.core.modules.record.models import AuthToken, RecordData, RecordForm, RecordId, RecordValues, SaveResult
from staffdesk.core.modules.submission.models import Err
from staffdesk.core.modules.submission.packager import package
from staffdesk.errors import ValidationError

logger = structlog.get_logger(__name__)


class RecordService(Service):
    """Form lifecycle for one record: populate, render, validate, package, submit."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)

    async def load_store(
        self, auth_token: AuthToken, entity_type: EntityType, fields: list[FieldDefinition], record_id: RecordId | None
    ) -> FieldValueStore:
        if record_id is None:
            return FieldValueStore.for_new_record(fields)
        record = await self.core.records.get_record(auth_token, entity_type, record_id)
        return FieldValueStore.from_record(entity_type, fields, record)

    async def get_values(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId | None = None) -> RecordValues:
        """Value store contents, hidden fields included."""
        fields = await self.core.services.field.load_fields(entity_type, include_hidden=True)
        store = await self.load_store(auth_token, entity_type, fields, record_id)
        return RecordValues(
            entity_type=entity_type,
            record_id=None if record_id is None else str(record_id),
            values=store.as_dict(),
        )

    async def get_form(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId | None = None) -> RecordForm:
        """Input descriptors for every visible field, pre-populated when editing."""
        fields = await self.core.services.field.load_fields(entity_type, include_hidden=True)
        store = await self.load_store(auth_token, entity_type, fields, record_id)
        inputs = render_form(fields, store.as_dict(), store.set)
        return RecordForm(
            entity_type=entity_type,
            record_id=None if record_id is None else str(record_id),
            inputs=[item.descriptor for item in inputs],
        )

    async def validate_form(self, entity_type: EntityType, values: Mapping[str, str]) -> ValidationResult:
        fields = await self.core.services.field.load_fields(entity_type)
        return validate(fields, values)

    async def save_record(
        self,
        auth_token: AuthToken,
        entity_type: EntityType,
        values: Mapping[str, str | bool],
        record_id: RecordId | None = None,
    ) -> SaveResult:
        """Validate, package and submit a form.

        Submitted values only reach visible fields, so stored values of hidden
        fields are sent back unchanged.

        Raises:
            ValidationError: If the values cannot be packaged (e.g. a non-numeric id)
            UpstreamError: If the records API rejects the submission
        """
        fields = await self.core.services.field.load_fields(entity_type, include_hidden=True)
        store = await self.load_store(auth_token, entity_type, fields, record_id)

        for rendered in render_form(fields, store.as_dict(), store.set):
            if rendered.field_name in values:
                rendered.change(values[rendered.field_name])

        validation = validate(fields, store.as_dict())
        if not validation.is_valid:
            logger.debug("record_validation_failed", entity_type=entity_type, errors=validation.errors)
            return SaveResult(saved=False, validation=validation)

        packaged = package(entity_type, store.as_dict(), fields)
        if isinstance(packaged, Err):
            raise ValidationError(packaged.reason)
        payload = packaged.value.to_payload()

        record: RecordData
        if record_id is None:
            record = await self.core.records.create_record(auth_token, entity_type, payload)
            logger.info("record_created", entity_type=entity_type, record_id=record.get("id"))
        else:
            record = await self.core.records.update_record(auth_token, entity_type, record_id, payload)
            logger.info("record_updated", entity_type=entity_type, record_id=record_id)
        return SaveResult(saved=True, record=record, validation=validation)

    async def delete_record(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId) -> None:
        await self.core.records.delete_record(auth_token, entity_type, record_id)
        logger.info("record_deleted", entity_type=entity_type, record_id=record_id)
