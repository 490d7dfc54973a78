import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import TokenUser, get_admin_user
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Create a company.

    Authorization required: admin
    """
    return company_crud.create(db, request)


@router.get("/", response_model=List[CompanyResponse])
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies ordered by name.

    Optional query filters:
    - minEmployees / maxEmployees: employee count bounds (min must not exceed max)
    - name: case-insensitive substring of the company name

    Any other query parameter is rejected with 400.
    """
    return company_crud.find(db, dict(request.query_params))


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs."""
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Partially update a company: name, description, numEmployees, logoUrl.

    Authorization required: admin
    """
    return company_crud.update(db, handle, request.to_update_data())


@router.delete("/{handle}")
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
