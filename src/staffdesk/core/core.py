from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from staffdesk.config import Config
from staffdesk.core.modules.record.gateway import RecordGateway

if TYPE_CHECKING:
    from staffdesk.core.modules.export.service import ExportService
    from staffdesk.core.modules.field.service import FieldService
    from staffdesk.core.modules.importer.service import ImportService
    from staffdesk.core.modules.record.service import RecordService


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that imports and initializes services by name."""

    field: FieldService
    record: RecordService
    importer: ImportService
    export: ExportService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []
        self._database = database

        # (attribute_name, module_path, class_name); field first, the others read through it
        service_configs = [
            ("field", "staffdesk.core.modules.field.service", "FieldService"),
            ("record", "staffdesk.core.modules.record.service", "RecordService"),
            ("importer", "staffdesk.core.modules.importer.service", "ImportService"),
            ("export", "staffdesk.core.modules.export.service", "ExportService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database, the records API client and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    records: RecordGateway
    services: Services

    def __init__(self, config: Config, records: RecordGateway | None = None) -> None:
        """Initialize core with config, MongoDB, the records client and services."""
        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard")
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.records = records or RecordGateway(config.records_api_url, timeout=config.records_api_timeout)
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services, then close the records client and MongoDB connection."""
        await self.services.stop_all()
        await self.records.aclose()
        await self.mongo_client.aclose()
