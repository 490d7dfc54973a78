import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import TokenUser, get_admin_or_same_user, get_admin_user
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import (
    ApplicationResponse,
    UserDetailResponse,
    UserNewRequest,
    UserResponse,
    UserTokenResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserTokenResponse)
def create_user(
    request: UserNewRequest,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Add a user. This is not the registration endpoint: only admins may add
    users here, and the new user may itself be an admin.

    Returns the new user and a token for them.
    """
    user = user_crud.register(db, request, is_admin=request.is_admin)
    logger.info(f"Admin {admin.username} added user {user.username}")
    return UserTokenResponse(
        user=UserResponse.model_validate(user),
        token=create_token(user.username, user.is_admin),
    )


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """List all users. Authorization required: admin"""
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current: TokenUser = Depends(get_admin_or_same_user),
):
    """
    Retrieve a user and the ids of jobs they applied to.

    Authorization required: admin or the user themselves
    """
    user = user_crud.get(db, username)
    return UserDetailResponse(
        **UserResponse.model_validate(user).model_dump(),
        jobs=user_crud.applied_job_ids(db, username),
    )


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current: TokenUser = Depends(get_admin_or_same_user),
):
    """
    Partially update a user: firstName, lastName, password, email.

    Authorization required: admin or the user themselves
    """
    return user_crud.update(db, username, request.to_update_data())


@router.delete("/{username}")
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current: TokenUser = Depends(get_admin_or_same_user),
):
    """Authorization required: admin or the user themselves"""
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current: TokenUser = Depends(get_admin_or_same_user),
):
    """
    Apply the user to a job.

    Authorization required: admin or the user themselves
    """
    application = user_crud.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=application.job_id)
