"""
API endpoints for managing users.

Users are stored in ``users.json``. Email addresses are unique
(case-insensitive) and phone numbers must contain exactly 10 digits.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, status

from storefront_api.core.errors import ApiError
from storefront_api.core.logging_config import get_logger
from storefront_api.core.models.io import UserCreate, UserUpdate
from storefront_api.core.storage import USERS_FILE, JsonFileDatabase
from storefront_api.server import responses
from storefront_api.server.services.deps import DatabaseDep, ItemIdDep
from storefront_api.server.validators import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    handle_failures,
    parse_positive_int,
)

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


def _get_user_or_404(db: JsonFileDatabase, user_id: int) -> Dict[str, Any]:
    user = db.get_by_id(USERS_FILE, user_id)
    if not user:
        raise ApiError.not_found("User not found")
    return user


def _email_taken(db: JsonFileDatabase, email: str, exclude_id: Optional[int] = None) -> bool:
    wanted = str(email).strip().lower()
    return any(
        str(user.get("email") or "").strip().lower() == wanted
        for user in db.get_all(USERS_FILE)
        if user.get("id") != exclude_id
    )


@router.get(
    "/filter/active",
    summary="List Active Users",
    description="Retrieve every user whose isActive flag is true.",
)
def list_active_users(db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch active users"):
        active_users = db.filter(USERS_FILE, lambda user: user.get("isActive") is True)
        return responses.success(active_users, "Active users fetched")


@router.get(
    "",
    summary="List Users",
    description="Retrieve a page of users, optionally filtered by a search term matched against name and email.",
)
def list_users(
    db: DatabaseDep,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    """
    List users.

    - **search**: Case-insensitive substring matched against name or email.
    - **page**: 1-based page number (default 1).
    - **limit**: Page size (default 10).
    """
    with handle_failures("Failed to fetch users"):
        page_no = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)
        users = db.get_all(USERS_FILE)
        if search:
            query = search.lower()
            users = [
                user
                for user in users
                if query in str(user.get("name") or "").lower() or query in str(user.get("email") or "").lower()
            ]
        return responses.paginate(users, page_no, page_size)


@router.get("/{item_id}", summary="Get User by ID")
def get_user(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch user"):
        user = _get_user_or_404(db, item_id)
        return responses.success(user, "User fetched successfully")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a user. name, email and phone are required; email must be unique.",
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Missing fields or invalid email/phone"},
        409: {"description": "Email already exists"},
    },
)
def create_user(payload: UserCreate, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to create user"), db.transaction():
        if _email_taken(db, payload.email):
            raise ApiError.conflict("Email already exists")
        user = db.create(USERS_FILE, payload.to_record())
        logger.info(f"Created user {user['id']}")
        return responses.success(user, "User created successfully", status.HTTP_201_CREATED)


@router.put("/{item_id}", summary="Update User")
def update_user(item_id: ItemIdDep, payload: UserUpdate, db: DatabaseDep) -> Dict[str, Any]:
    """
    Update user.

    Merges the supplied fields into the stored user. Email and phone are
    validated when present, and a new email must not belong to another user.
    """
    with handle_failures("Failed to update user"), db.transaction():
        user = _get_user_or_404(db, item_id)
        changes = payload.changes()
        new_email = changes.get("email")
        if new_email and new_email != user.get("email") and _email_taken(db, new_email, exclude_id=item_id):
            raise ApiError.conflict("Email already exists")
        updated = db.update(USERS_FILE, item_id, changes)
        return responses.success(updated, "User updated successfully")


@router.patch("/{item_id}", summary="Partially Update User")
def patch_user(item_id: ItemIdDep, db: DatabaseDep, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    with handle_failures("Failed to update user"):
        _get_user_or_404(db, item_id)
        updated = db.update(USERS_FILE, item_id, payload)
        return responses.success(updated, "User partially updated")


@router.delete("/{item_id}", summary="Delete User")
def delete_user(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to delete user"):
        _get_user_or_404(db, item_id)
        db.delete_record(USERS_FILE, item_id)
        logger.info(f"Deleted user {item_id}")
        return responses.success(None, "User deleted successfully")
