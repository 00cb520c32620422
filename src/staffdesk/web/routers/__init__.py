from staffdesk.web.routers.exports import router as exports_router
from staffdesk.web.routers.fields import router as fields_router
from staffdesk.web.routers.forms import router as forms_router
from staffdesk.web.routers.imports import router as imports_router
from staffdesk.web.routers.metadata import router as metadata_router
from staffdesk.web.routers.records import router as records_router

__all__ = [
    "exports_router",
    "fields_router",
    "forms_router",
    "imports_router",
    "metadata_router",
    "records_router",
]
