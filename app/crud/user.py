"""
CRUD operations for users and job applications.
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import execute_positional
from app.core.errors import DuplicateError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.crud.base import check_update_data
from app.models.job import Job
from app.models.user import Application, User
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
}

# username and isAdmin cannot be changed through an update; every column is NOT NULL
UPDATABLE_FIELDS = ("firstName", "lastName", "password", "email")


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: Unknown user or wrong password (same message for both)
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")
    return user


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Raises:
        DuplicateError: If the username is taken
    """
    if get_by_username(db, user_data.username):
        raise DuplicateError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    logger.info(f"Registered user {db_user.username} (admin: {db_user.is_admin})")
    return db_user


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get(db: Session, username: str) -> User:
    """
    Raises:
        NotFoundError: If there is no such user
    """
    user = get_by_username(db, username)
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def find_all(db: Session) -> List[User]:
    """All users ordered by username."""
    return db.query(User).order_by(User.username).all()


def update(db: Session, username: str, data: Mapping[str, Any]) -> User:
    """
    Partially update a user; only the supplied fields change.

    A supplied password is hashed before storage.

    Args:
        data: Any of firstName, lastName, password, email

    Raises:
        EmptyUpdateError: If data is empty
        BadRequestError: Field that cannot be updated, or a null value
        NotFoundError: If there is no such user
    """
    check_update_data("user", data, UPDATABLE_FIELDS, UPDATABLE_FIELDS)

    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, USER_FIELDS)
    username_idx = len(values) + 1

    result = execute_positional(
        db,
        f"UPDATE users SET {set_cols} WHERE username = ${username_idx}",
        [*values, username],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return get(db, username)


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If there is no such user
    """
    user = get(db, username)

    db.delete(user)
    db.commit()

    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> Application:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the user or job does not exist
        DuplicateError: If the user already applied to this job
    """
    get(db, username)
    if not db.query(Job).filter(Job.id == job_id).first():
        raise NotFoundError(f"No job: {job_id}")

    existing = db.query(Application).filter(
        Application.username == username,
        Application.job_id == job_id,
    ).first()
    if existing:
        raise DuplicateError(f"User {username} already applied to job {job_id}")

    application = Application(username=username, job_id=job_id)
    db.add(application)
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
    return application


def applied_job_ids(db: Session, username: str) -> List[int]:
    """Ids of the jobs a user applied to, ascending."""
    rows = (
        db.query(Application.job_id)
        .filter(Application.username == username)
        .order_by(Application.job_id)
        .all()
    )
    return [job_id for (job_id,) in rows]
