"""
Employee Roster API: Employee SQLAlchemy Model
=================================================

What:  ORM model representing the `employees` table.
Why:   This is the storage schema: it decides the record shape, the
       default-value policy, and which fields are required.
Who:   Used by EmployeeService for every query; created on connect by
       StorageClient.

Table Design:
    - id:            UUID generated in Python at construction, never reassigned
    - name:          required, non-blank, unbounded length
    - contract_type: required, non-blank, unbounded length (wire name `contractType`)
    - employ_date:   UTC timestamp, defaults to creation time (wire name `employDate`)

Required-field enforcement happens on attribute assignment through
SQLAlchemy's @validates hook, so both the constructor and update's field
overwrite hit the same check and raise ValidationError before any SQL runs.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from roster.database import Base
from roster.exceptions import ValidationError


# Python attribute → wire/schema path name used in validation messages
REQUIRED_FIELDS = {
    "name": "name",
    "contract_type": "contractType",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    """
    One employee record.

    Lifecycle:
        1. Created by POST /employees (id and employ_date assigned here)
        2. name / contract_type overwritten by PATCH /employees/{id}
        3. Removed by DELETE /employees/{id} (hard delete)
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String, nullable=False)

    contract_type: Mapped[str] = mapped_column(
        "contract_type", String, nullable=False
    )

    employ_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __init__(self, **kwargs):
        # Assign the defaults eagerly so a freshly built record already has
        # its id and date before the INSERT is flushed
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("employ_date", None)
        if kwargs["employ_date"] is None:
            kwargs["employ_date"] = utcnow()
        for key in REQUIRED_FIELDS:
            kwargs.setdefault(key, None)
        super().__init__(**kwargs)

    @validates("name", "contract_type")
    def validate_required(self, key: str, value):
        path = REQUIRED_FIELDS[key]
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(
                message=f"Employee validation failed: {path}: Path `{path}` is required.",
                field=path,
            )
        if not isinstance(value, str):
            raise ValidationError(
                message=f"Employee validation failed: {path}: Cast to string failed for value {value!r}.",
                field=path,
            )
        return value

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', contract_type='{self.contract_type}')>"
