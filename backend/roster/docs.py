"""
Employee Roster API: API Documentation
=========================================

What:  Metadata for the generated OpenAPI document and the Swagger UI
       served at /api-docs.
How:   FastAPI builds the document from route decorators and Pydantic
       models; this module supplies everything that is not derivable from
       the routes (title, description, tag descriptions, server list) and
       post-processes the generated schema once.
"""

from typing import Any, Dict, List

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from roster import __version__
from roster.config import Settings

API_TITLE = "Employee Roster API"
API_DESCRIPTION = (
    "CRUD API over a single Employee collection. "
    "Records carry a generated `id`, a `name`, a `contractType` and an "
    "`employDate` that defaults to the creation time."
)

DOCS_URL = "/api-docs"
OPENAPI_URL = "/openapi.json"

OPENAPI_TAGS: List[Dict[str, Any]] = [
    {"name": "Employees", "description": "Employee management API"},
    {"name": "Health", "description": "Service root and liveness probe"},
]


def server_list(config: Settings) -> List[Dict[str, str]]:
    return [
        {
            "url": f"http://localhost:{config.port}",
            "description": f"{config.environment} server",
        }
    ]


def docs_kwargs(config: Settings) -> Dict[str, Any]:
    """Keyword arguments for FastAPI() that configure the documentation."""
    return {
        "title": API_TITLE,
        "description": API_DESCRIPTION,
        "version": __version__,
        "docs_url": DOCS_URL,
        "redoc_url": None,
        "openapi_url": OPENAPI_URL,
        "openapi_tags": OPENAPI_TAGS,
        "servers": server_list(config),
    }


def install_openapi(app: FastAPI) -> None:
    """
    Replace app.openapi with a cached generator that drops FastAPI's
    default 422 responses.

    Body and parameter errors are reported as 400 by the exception handlers
    in main.py, so the generated 422 entries would document a status the
    API never returns.
    """

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
            tags=app.openapi_tags,
            servers=app.servers,
        )
        for path_item in schema.get("paths", {}).values():
            for operation in path_item.values():
                if isinstance(operation, dict):
                    operation.get("responses", {}).pop("422", None)
        components = schema.get("components", {}).get("schemas", {})
        components.pop("HTTPValidationError", None)
        components.pop("ValidationError", None)
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi
