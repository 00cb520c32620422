from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Routes reachable without a token
PUBLIC_ENDPOINTS = {
    ("GET", "/health"),
    ("GET", "/api/v1/metadata/version"),
}


def set_custom_openapi(app: FastAPI, version: str) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="staffdesk API",
            version=version,
            summary="Admin-configurable record forms, CSV import and export for staffing records",
            routes=app.routes,
        )

        openapi_schema["components"]["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Records API token, forwarded unchanged (preferred)",
            },
            "TokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "token",
                "description": "Records API token stored in cookie",
            },
        }
        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"TokenCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Authentication required", "type": "authentication_error"},
                {"message": "Field 'Field_3' not found", "type": "not_found"},
                {"message": "Select field 'Field_2' must have at least one option", "type": "validation_error"},
                {"message": "Records API unreachable", "type": "upstream_error"},
            ]
        }
    }
