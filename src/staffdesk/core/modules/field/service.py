from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from staffdesk.core.core import Service
from staffdesk.core.modules.field import registry
from staffdesk.core.modules.field.models import (
    EntityType,
    FieldCreate,
    FieldDefinition,
    FieldHistoryAction,
    FieldHistoryEntry,
    FieldUpdate,
)
from staffdesk.core.modules.field.standard import get_standard_fields
from staffdesk.core.modules.field.validators import get_validator
from staffdesk.errors import NotFoundError, ValidationError
from staffdesk.utils import now

logger = structlog.get_logger(__name__)

_HISTORY_EXCLUDE = {"created_at", "updated_at"}


class FieldService(Service):
    """Admin-defined field definitions and their change history."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("fields")
        self._history_collection = database.get_collection("field_history")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("entity_type", 1), ("field_name", 1)], unique=True)
        await self._collection.create_index([("entity_type", 1), ("sort_order", 1)])
        await self._history_collection.create_index([("field_id", 1), ("performed_at", -1)])

    async def get_admin_fields(self, entity_type: EntityType) -> list[FieldDefinition]:
        """Stored definitions for an entity type, in sort order."""
        cursor = self._collection.find({"entity_type": entity_type}).sort([("sort_order", 1), ("created_at", 1)])
        return await FieldDefinition.list_cursor(cursor)

    async def load_fields(self, entity_type: EntityType, include_hidden: bool = False) -> list[FieldDefinition]:
        """Field list for a form, import or export. Never raises.

        Stored definitions shadow standard fields of the same name. When the
        store is unreachable or empty the standard fields are used as is.
        """
        try:
            admin_fields = await self.get_admin_fields(entity_type)
        except PyMongoError as e:
            logger.warning("field_store_unavailable", entity_type=entity_type, error=str(e))
            admin_fields = []

        if not admin_fields:
            logger.debug("standard_fields_fallback", entity_type=entity_type)

        fields = registry.sort_fields(registry.merge_fields(admin_fields, get_standard_fields(entity_type)))
        if not include_hidden:
            fields = registry.visible_fields(fields)
        return fields

    async def get_field(self, field_id: UUID) -> FieldDefinition:
        doc = await self._collection.find_one({"_id": field_id})
        if doc is None:
            raise NotFoundError(f"Field '{field_id}' not found")
        return FieldDefinition.model_validate(doc)

    async def get_next_field_name(self, entity_type: EntityType) -> str:
        return registry.next_field_name(await self.get_admin_fields(entity_type))

    async def create_field(self, entity_type: EntityType, data: FieldCreate) -> FieldDefinition:
        """Create a field definition, generating its name when none is given.

        Raises:
            ValidationError: If the definition is invalid or the name is taken
        """
        admin_fields = await self.get_admin_fields(entity_type)
        field_name = data.field_name or registry.next_field_name(admin_fields)
        if registry.get_field(admin_fields, field_name) is not None:
            raise ValidationError(f"Field '{field_name}' already exists")

        field = FieldDefinition(
            entity_type=entity_type,
            field_name=field_name,
            field_label=data.field_label.strip(),
            field_type=data.field_type,
            is_required=data.is_required,
            is_hidden=data.is_hidden,
            options=data.options,
            placeholder=data.placeholder,
            default_value=data.default_value,
            sort_order=data.sort_order if data.sort_order is not None else len(admin_fields) * 10,
        )
        field = get_validator(field.field_type).validate_field_definition(field)

        try:
            await self._collection.insert_one(field.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError(f"Field '{field_name}' already exists") from e

        await self._add_history(field.id, FieldHistoryAction.CREATED, new_values=field.snapshot(_HISTORY_EXCLUDE))
        logger.info("field_created", entity_type=entity_type, field_name=field_name, field_type=field.field_type)
        return field

    async def update_field(self, field_id: UUID, data: FieldUpdate) -> FieldDefinition:
        """Apply a partial update. The field name never changes.

        Raises:
            NotFoundError: If the field does not exist
            ValidationError: If the resulting definition is invalid
        """
        current = await self.get_field(field_id)
        changes = {key: value for key, value in data.model_dump(exclude_unset=True).items() if key != "field_name"}
        if "field_label" in changes and changes["field_label"] is not None:
            changes["field_label"] = changes["field_label"].strip()
        # Explicit nulls only clear the optional text attributes
        changes = {
            key: value for key, value in changes.items() if value is not None or key in {"placeholder", "default_value"}
        }

        updated = current.model_copy(update=changes)
        updated = get_validator(updated.field_type).validate_field_definition(updated)

        old_values = current.snapshot(_HISTORY_EXCLUDE)
        new_values = updated.snapshot(_HISTORY_EXCLUDE)
        changed_fields = [key for key in new_values if new_values[key] != old_values.get(key)]
        if not changed_fields:
            return current

        updated.updated_at = now()
        await self._collection.replace_one({"_id": field_id}, updated.to_mongo())
        await self._add_history(
            field_id,
            FieldHistoryAction.UPDATED,
            old_values={key: old_values.get(key) for key in changed_fields},
            new_values={key: new_values[key] for key in changed_fields},
            changed_fields=changed_fields,
        )
        logger.info("field_updated", field_id=field_id, changed_fields=changed_fields)
        return updated

    async def delete_field(self, field_id: UUID) -> None:
        field = await self.get_field(field_id)
        await self._collection.delete_one({"_id": field_id})
        await self._add_history(field_id, FieldHistoryAction.DELETED, old_values=field.snapshot(_HISTORY_EXCLUDE))
        logger.info("field_deleted", entity_type=field.entity_type, field_name=field.field_name)

    async def get_field_history(self, field_id: UUID) -> list[FieldHistoryEntry]:
        """History entries for a field, newest first. Kept after the field is deleted."""
        cursor = self._history_collection.find({"field_id": field_id}).sort("performed_at", -1)
        return await FieldHistoryEntry.list_cursor(cursor)

    async def _add_history(
        self,
        field_id: UUID,
        action: FieldHistoryAction,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        changed_fields: list[str] | None = None,
    ) -> None:
        entry = FieldHistoryEntry(
            field_id=field_id,
            action=action,
            old_values=old_values,
            new_values=new_values,
            changed_fields=changed_fields if changed_fields is not None else list((new_values or old_values or {}).keys()),
        )
        await self._history_collection.insert_one(entry.to_mongo())
