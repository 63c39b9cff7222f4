"""
User signup and login.
"""

from __future__ import annotations

import logging

from pydantic import validate_email

from storefront.auth import hash_password, verify_password
from storefront.db import DbClient, UserRecord
from storefront.errors import ConflictError, InvalidRequestError
from storefront.schemas import SignupRequest

logger = logging.getLogger(__name__)

SIGNUP_FIELDS = ("f_name", "l_name", "username", "address", "number", "email", "password")

# bcrypt rejects passwords longer than this.
MAX_PASSWORD_BYTES = 72


def check_password(password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidRequestError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def normalize_email(email: str) -> str:
    try:
        _, address = validate_email(email)
    except ValueError:
        raise InvalidRequestError("Invalid email address") from None
    return address


def signup(db: DbClient, payload: SignupRequest) -> UserRecord:
    values = payload.model_dump()
    if any(not values.get(name) for name in SIGNUP_FIELDS):
        raise InvalidRequestError("All fields are required.")
    email = normalize_email(values["email"])
    check_password(values["password"])
    if db.get_user_by_email(email):
        raise ConflictError("Email already registered")

    user = db.add_user(
        UserRecord(
            f_name=values["f_name"],
            l_name=values["l_name"],
            username=values["username"],
            address=values["address"],
            number=values["number"],
            email=email,
            password_hash=hash_password(values["password"]),
        )
    )
    logger.info("Registered user %s", user.user_id)
    return user


def authenticate(db: DbClient, email: str, password: str) -> UserRecord:
    user = db.get_user_by_email(email)
    if not user:
        raise InvalidRequestError("User not found")
    if not verify_password(password, user.password_hash):
        raise InvalidRequestError("Incorrect password")
    return user


def create_admin(db: DbClient, **fields: str) -> UserRecord:
    """Create an admin account, or promote the user that already owns the email."""
    existing = db.get_user_by_email(fields["email"])
    if existing:
        db.set_user_role(existing.user_id, "admin")
        logger.info("Promoted %s to admin", existing.email)
        return db.get_user(existing.user_id)

    password = fields.pop("password")
    if not password:
        raise InvalidRequestError("A password is required for a new admin")
    check_password(password)
    user = db.add_user(UserRecord(password_hash=hash_password(password), role="admin", **fields))
    logger.info("Created admin %s", user.email)
    return user
