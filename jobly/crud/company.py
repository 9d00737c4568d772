"""
CRUD operations for the Company model.

Reads go through the ORM query API; partial updates and deletes are issued as
SQL with RETURNING so a missing row is detected without a second round trip.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobly.core.database import execute_positional
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update
from jobly.models.company import Company
from jobly.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

VALID_FILTERS = ("name", "minEmployees", "maxEmployees")

# Request field name -> column name, where they differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_COMPANY_COLUMNS = [
    Company.__table__.c.handle,
    Company.__table__.c.name,
    Company.__table__.c.description,
    Company.__table__.c.num_employees,
    Company.__table__.c.logo_url,
]


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a company.

    The existence check only gives a friendlier message; the primary key is
    what actually stops two concurrent creates with the same handle.

    Raises:
        BadRequestError: If the handle (or name) is already taken
    """
    if db.query(Company).filter(Company.handle == company_data.handle).first():
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

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
        db.rollback()
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(db: Session, limit: int = 100) -> List[Company]:
    """Return up to ``limit`` companies ordered by name."""
    return db.query(Company).order_by(Company.name).limit(limit).all()


def _parse_int(query: Mapping[str, Any], key: str) -> int:
    try:
        return int(query[key])
    except (TypeError, ValueError):
        raise BadRequestError(f"{key} must be an integer")


def filter(db: Session, query: Mapping[str, Any]) -> List[Company]:
    """
    Return companies matching every supplied filter, ordered by name.

    Filters:
        name: case-insensitive substring of the company name
        minEmployees: inclusive lower bound on num_employees
        maxEmployees: inclusive upper bound on num_employees

    Raises:
        BadRequestError: On an unknown filter key, a non-integer bound, or
            minEmployees greater than maxEmployees
    """
    for key in query:
        if key not in VALID_FILTERS:
            raise BadRequestError("Invalid filter")

    min_employees = _parse_int(query, "minEmployees") if "minEmployees" in query else None
    max_employees = _parse_int(query, "maxEmployees") if "maxEmployees" in query else None

    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    companies = db.query(Company)

    if "name" in query:
        companies = companies.filter(Company.name.ilike(f"%{query['name']}%"))
    if min_employees is not None:
        companies = companies.filter(Company.num_employees >= min_employees)
    if max_employees is not None:
        companies = companies.filter(Company.num_employees <= max_employees)

    return companies.order_by(Company.name).all()


def get(db: Session, handle: str) -> Company:
    """
    Return a company with its jobs loaded.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = (
        db.query(Company)
        .options(selectinload(Company.jobs))
        .filter(Company.handle == handle)
        .first()
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")

    return company


def update(db: Session, handle: str, data: Dict[str, Any]):
    """
    Partially update a company.

    ``data`` uses request field names (numEmployees, logoUrl); only the
    supplied fields change.

    Returns:
        The updated row (handle, name, description, num_employees, logo_url)

    Raises:
        BadRequestError: If ``data`` is empty, the name is taken, or a
            column constraint is broken
        NotFoundError: If no company has this handle
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_var_idx = len(values) + 1

    query_sql = f"""UPDATE companies
                    SET {set_cols}
                    WHERE handle = ${handle_var_idx}
                    RETURNING handle, name, description, num_employees, logo_url"""
    try:
        company = execute_positional(db, query_sql, [*values, handle], _COMPANY_COLUMNS).first()
        db.commit()
    except IntegrityError:
        db.rollback()
        if "name" in data:
            raise BadRequestError(f"Duplicate company name: {data['name']}")
        raise BadRequestError(f"Invalid company data for {handle}")

    if not company:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company. Its jobs are left alone.

    Raises:
        NotFoundError: If no company has this handle
        BadRequestError: If the store refuses because jobs still reference it
    """
    try:
        result = execute_positional(
            db,
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        ).first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Company {handle} still has jobs")

    if not result:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
