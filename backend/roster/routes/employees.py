"""
Employee Roster API: Employee Route Handlers
===============================================

What:  CRUD endpoints for the Employee collection, mounted at /employees.
How:   Each handler extracts the request data, calls EmployeeService once,
       and returns a response model. Errors are raised as application
       exceptions and formatted by the global handlers in main.py.

Id resolution:
    GET/PATCH/DELETE /employees/{id} depend on `resolve_employee`. It runs
    before the handler body and either returns the record, which FastAPI
    passes to the handler as an argument, or raises NotFoundError /
    StorageError, in which case the handler never runs.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import get_db_session
from roster.models.employee import Employee
from roster.schemas.employee import (
    DeleteResponse,
    EmployeePayload,
    EmployeeResponse,
    ErrorResponse,
)
from roster.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


async def resolve_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Employee:
    """Load the record named by the `{employee_id}` path parameter or short-circuit."""
    return await employee_service.find_employee(db, employee_id)


NOT_FOUND = {404: {"description": "Employee not found", "model": ErrorResponse}}
STORAGE_FAULT = {500: {"description": "Storage error", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Validation failed", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses={
        200: {"description": "List of the employees"},
        **STORAGE_FAULT,
    },
    summary="Returns the list of all employees",
)
async def list_employees(
    db: AsyncSession = Depends(get_db_session),
) -> List[EmployeeResponse]:
    return await employee_service.list_employees(db)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "Description of the employee by id"},
        **NOT_FOUND,
        **STORAGE_FAULT,
    },
    summary="Returns the employee by id",
)
async def get_employee(
    employee: Employee = Depends(resolve_employee),
) -> EmployeeResponse:
    return EmployeeResponse.model_validate(employee)


@router.post(
    "",
    status_code=201,
    response_model=EmployeeResponse,
    responses={
        201: {"description": "The employee was successfully created"},
        **BAD_REQUEST,
        **STORAGE_FAULT,
    },
    summary="Create a new employee",
)
async def create_employee(
    payload: EmployeePayload,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    """
    Create a record with a server-assigned id and employDate.

    Returns 201 with the stored record; 400 if `name` or `contractType`
    is missing.
    """
    return await employee_service.create_employee(db, payload)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "The employee was successfully updated"},
        **BAD_REQUEST,
        **NOT_FOUND,
        **STORAGE_FAULT,
    },
    summary="Update the employee by id",
)
async def update_employee(
    payload: EmployeePayload,
    employee: Employee = Depends(resolve_employee),
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    """
    Overwrite `name` and `contractType`. Both must be supplied;
    `id` and `employDate` never change.
    """
    return await employee_service.update_employee(db, employee, payload)


@router.delete(
    "/{employee_id}",
    response_model=DeleteResponse,
    responses={
        200: {"description": "The employee was successfully deleted"},
        **NOT_FOUND,
        **STORAGE_FAULT,
    },
    summary="Delete the employee by id",
)
async def delete_employee(
    employee: Employee = Depends(resolve_employee),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await employee_service.delete_employee(db, employee)
