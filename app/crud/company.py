"""
CRUD operations for Company model.

Listing and partial updates go through the SQL builders in app.core.sql;
the rest uses the ORM directly.
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute_positional, positional_text
from app.core.errors import DuplicateError, NotFoundError
from app.core.sql import sql_for_company_filters, sql_for_partial_update
from app.crud.base import check_update_data
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# JSON field name -> column name, for fields whose names differ
COMPANY_FIELDS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

# Fields a company update may touch; the handle is fixed at creation
UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")
REQUIRED_FIELDS = ("name", "description")


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company.

    Raises:
        DuplicateError: If the handle or name is already taken
    """
    if get_by_handle(db, company_data.handle):
        raise DuplicateError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        # Company names are unique too
        db.rollback()
        raise DuplicateError(f"Duplicate company name: {company_data.name}")
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def get_by_handle(db: Session, handle: str) -> Optional[Company]:
    """Retrieve a company by handle, None if missing."""
    return db.query(Company).filter(Company.handle == handle).first()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company by handle.

    Raises:
        NotFoundError: If there is no such company
    """
    company = get_by_handle(db, handle)
    if not company:
        raise NotFoundError(f"No company: {handle}")
    return company


def find(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Company]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        db: Database session
        filters: Any of minEmployees, maxEmployees, name (substring,
            case-insensitive). Empty or None lists every company.

    Raises:
        UnrecognizedFilterKeyError: Unknown key, bad value or min > max
    """
    where, values = sql_for_company_filters(filters or {})

    sql = "SELECT * FROM companies"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY name"

    return db.query(Company).from_statement(positional_text(db, sql, values)).all()


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Company:
    """
    Partially update a company; only the supplied fields change.

    Args:
        data: Any of name, description, numEmployees, logoUrl

    Raises:
        EmptyUpdateError: If data is empty
        BadRequestError: Field that cannot be updated, or null name/description
        NotFoundError: If there is no such company
    """
    check_update_data("company", data, UPDATABLE_FIELDS, REQUIRED_FIELDS)

    set_cols, values = sql_for_partial_update(data, COMPANY_FIELDS)
    handle_idx = len(values) + 1

    result = execute_positional(
        db,
        f"UPDATE companies SET {set_cols} WHERE handle = ${handle_idx}",
        [*values, handle],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return get(db, handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: If there is no such company
    """
    company = get(db, handle)

    db.delete(company)
    db.commit()

    logger.info(f"Deleted company {handle}")
