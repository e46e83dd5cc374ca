"""
Employee Roster API: Employee Service
========================================

What:  Maps each resource operation onto exactly one storage call.
Why:   Keeps SQL and driver error translation out of the route handlers.
How:   Stateless methods that receive the request's AsyncSession.
Who:   Called by routes/employees.py and by the id-resolution dependency.

Error translation:
    record schema rejects a field     → ValidationError (400), raised by the model
    IntegrityError / DataError        → ValidationError (400), the store refused the record
    other SQLAlchemyError or OSError  → StorageError (500), driver message forwarded
    id that cannot be a UUID          → StorageError (500), the lookup itself faulted
    no row for a well-formed id       → NotFoundError (404)

Writes are committed here rather than in the session dependency so a
commit failure is reported on the request that caused it.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.exceptions import NotFoundError, StorageError, ValidationError
from roster.models.employee import Employee
from roster.schemas.employee import (
    DeleteResponse,
    EmployeePayload,
    EmployeeResponse,
)

logger = logging.getLogger(__name__)

# Async drivers raise socket errors (ConnectionRefusedError, ...) unwrapped
STORAGE_FAULTS = (SQLAlchemyError, OSError)


def parse_employee_id(employee_id: str) -> uuid.UUID:
    """Cast a path identifier to the store's key type."""
    try:
        return uuid.UUID(str(employee_id))
    except ValueError:
        raise StorageError(
            message=f'Cast to UUID failed for value "{employee_id}" at path "id" for model "Employee"',
            context={"employee_id": employee_id},
        )


class EmployeeService:
    """
    Query mapping for the Employee collection.

    Responsibilities:
        - list_employees(): every record, no filtering or paging
        - find_employee(): id resolution, returns the ORM record
        - create_employee(), update_employee(), delete_employee()
    """

    async def list_employees(self, db: AsyncSession) -> List[EmployeeResponse]:
        try:
            result = await db.execute(select(Employee).order_by(Employee.employ_date))
            employees = result.scalars().all()
        except STORAGE_FAULTS as e:
            logger.error("Database error listing employees: %s", e)
            raise StorageError.from_exception(e)
        return [EmployeeResponse.model_validate(e) for e in employees]

    async def find_employee(self, db: AsyncSession, employee_id: str) -> Employee:
        """
        Load one record by path identifier.

        Raises:
            NotFoundError: no record has this id (→ 404)
            StorageError:  the id is malformed or the query failed (→ 500)
        """
        key = parse_employee_id(employee_id)
        try:
            employee = await db.get(Employee, key)
        except STORAGE_FAULTS as e:
            logger.error("Database error fetching employee %s: %s", employee_id, e)
            raise StorageError.from_exception(e, employee_id=employee_id)

        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=str(employee_id))
        return employee

    async def create_employee(
        self, db: AsyncSession, payload: EmployeePayload
    ) -> EmployeeResponse:
        # Raises ValidationError before anything touches the session
        employee = Employee(name=payload.name, contract_type=payload.contract_type)
        db.add(employee)
        await self._commit(db, "create")
        logger.info("Employee created: %s", employee.id)
        return EmployeeResponse.model_validate(employee)

    async def update_employee(
        self, db: AsyncSession, employee: Employee, payload: EmployeePayload
    ) -> EmployeeResponse:
        """
        Overwrite the mutable fields of an already-resolved record.

        Both fields are assigned from the payload; an omitted field fails
        the record schema. id and employ_date are never assigned.
        """
        employee.name = payload.name
        employee.contract_type = payload.contract_type
        await self._commit(db, "update")
        logger.info("Employee updated: %s", employee.id)
        return EmployeeResponse.model_validate(employee)

    async def delete_employee(self, db: AsyncSession, employee: Employee) -> DeleteResponse:
        snapshot = EmployeeResponse.model_validate(employee)
        try:
            await db.delete(employee)
        except STORAGE_FAULTS as e:
            raise StorageError.from_exception(e, employee_id=str(employee.id))
        await self._commit(db, "delete")
        logger.info("Employee deleted: %s", snapshot.id)
        return DeleteResponse(message="Employee deleted successfully", employee=snapshot)

    async def _commit(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.commit()
        except (IntegrityError, DataError) as e:
            await db.rollback()
            logger.warning("Employee %s rejected by store: %s", operation, e.orig)
            raise ValidationError(message=f"Employee validation failed: {e.orig}")
        except STORAGE_FAULTS as e:
            await db.rollback()
            logger.error("Database error on employee %s: %s", operation, e)
            raise StorageError.from_exception(e, operation=operation)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; every method receives its session
employee_service = EmployeeService()
