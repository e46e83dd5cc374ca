"""
Employee Roster API: Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the JSON contract of the /employees API.
Why:   Automatic serialization and OpenAPI doc generation; the docs at
       /api-docs are built from these models and the route metadata.
How:   Wire names are camelCase (`contractType`, `employDate`) through field
       aliases; Python code uses snake_case. FastAPI serializes responses
       by alias.

Validation split:
    The request body only checks JSON types. Whether `name` and
    `contractType` are present is decided by the record schema
    (models/employee.py), so create and update report the same 400 message.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


EMPLOYEE_EXAMPLE = {
    "id": "61f11a7a-124b-4d23-87e1-f595a1b2c3d4",
    "name": "Maniek",
    "contractType": "UoD",
    "employDate": "2022-01-26T09:55:06.071000Z",
}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeePayload(BaseModel):
    """
    Body of POST /employees and PATCH /employees/{id}.

    Both fields are optional at this layer; a missing one is passed through
    as None and rejected by the record schema with a 400.
    """
    name: Optional[str] = Field(default=None, description="Name of the employee")
    contract_type: Optional[str] = Field(
        default=None,
        alias="contractType",
        description="Type of the employee's contract",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"name": "Maniek", "contractType": "UoD"}},
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    Full representation of one employee record.
    Returned by list (as array items), get, create and update.
    """
    id: uuid.UUID = Field(description="Autogenerated id")
    name: str = Field(description="Name of the employee")
    contract_type: str = Field(alias="contractType", description="Type of the employee's contract")
    employ_date: datetime = Field(alias="employDate", description="The date of employ (UTC)")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={"example": EMPLOYEE_EXAMPLE},
    )

    @field_validator("employ_date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class DeleteResponse(BaseModel):
    """Returned by DELETE /employees/{id}: confirmation plus the removed record."""
    message: str = Field(
        default="Employee deleted successfully",
        description="Human-readable confirmation",
    )
    employee: EmployeeResponse = Field(description="The record that was deleted")


# ══════════════════════════════════════════════════════════════════════════
# Shared Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (validation_error, not_found, storage_error)
        message: Human-readable description
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class RootResponse(BaseModel):
    message: str
    docs: str
