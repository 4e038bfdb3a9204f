"""User data access helpers (the credential store)."""
from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.config import get_settings
from mama_app.core.exceptions import ValidationError
from mama_app.core.security import get_password_hash
from mama_app.models.user import User
from mama_app.schemas.user import UserUpdate

MIN_PASSWORD_LENGTH = 6

_CONTACT_REQUIRED = "Either email or phone number is required"
_UNIQUE_FIELDS = ("username", "email", "phone_number")


def _normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


def _normalize_phone(phone_number: str | None) -> str | None:
    if phone_number is None:
        return None
    phone_number = phone_number.strip()
    return phone_number or None


def _add_error(errors: dict[str, list[str]], field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


async def _find_conflicts(
    session: AsyncSession,
    *,
    values: dict[str, Any],
    exclude_id: int | None = None,
) -> dict[str, list[str]]:
    """Return taken-value errors for the unique fields present in ``values``."""
    errors: dict[str, list[str]] = {}
    for field in _UNIQUE_FIELDS:
        value = values.get(field)
        if value is None:
            continue
        column = getattr(User, field)
        stmt = select(User.id).where(column == value)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        if result.scalar_one_or_none() is not None:
            label = field.replace("_", " ")
            _add_error(errors, field, f"The {label} has already been taken.")
    return errors


async def _commit_or_conflict(
    session: AsyncSession, values: dict[str, Any], exclude_id: int | None
) -> None:
    """Commit, translating a lost uniqueness race into a ValidationError."""
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        errors = await _find_conflicts(session, values=values, exclude_id=exclude_id)
        raise ValidationError(
            errors or {"username": ["The account details have already been taken."]}
        ) from exc


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    """Return a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_login(session: AsyncSession, login: str) -> User | None:
    """Return the user whose email or phone number equals ``login``."""
    identifier = (login or "").strip()
    if not identifier:
        return None
    result = await session.execute(
        select(User)
        .where(
            or_(
                User.email == identifier.lower(),
                User.phone_number == identifier,
            )
        )
        .order_by(User.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    *,
    username: str,
    password: str,
    email: str | None = None,
    phone_number: str | None = None,
) -> User:
    """Persist a new user with hashed password."""
    values: dict[str, Any] = {
        "username": username.strip(),
        "email": _normalize_email(email),
        "phone_number": _normalize_phone(phone_number),
    }
    errors: dict[str, list[str]] = {}
    if not values["email"] and not values["phone_number"]:
        _add_error(errors, "login", _CONTACT_REQUIRED)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        _add_error(
            errors,
            "password",
            f"The password must be at least {MIN_PASSWORD_LENGTH} characters.",
        )
    for field, messages in (await _find_conflicts(session, values=values)).items():
        errors.setdefault(field, []).extend(messages)
    if errors:
        raise ValidationError(errors)

    user = User(
        **values,
        hashed_password=get_password_hash(password),
        image_path=get_settings().default_profile_image,
    )
    session.add(user)
    await _commit_or_conflict(session, values, exclude_id=None)
    await session.refresh(user)
    return user


async def update_user(session: AsyncSession, user: User, payload: UserUpdate) -> User:
    """Apply the fields explicitly present in ``payload``."""
    provided = payload.model_fields_set
    changes: dict[str, Any] = {}
    errors: dict[str, list[str]] = {}

    if "username" in provided:
        if payload.username is None:
            _add_error(errors, "username", "The username field cannot be null.")
        else:
            changes["username"] = payload.username
    if "email" in provided:
        changes["email"] = _normalize_email(payload.email)
    if "phone_number" in provided:
        changes["phone_number"] = _normalize_phone(payload.phone_number)

    new_password: str | None = None
    if "password" in provided:
        if payload.password is None:
            _add_error(errors, "password", "The password field cannot be null.")
        elif payload.password_confirmation != payload.password:
            _add_error(
                errors,
                "password_confirmation",
                "The password confirmation does not match.",
            )
        else:
            new_password = payload.password

    email_after = changes.get("email", user.email)
    phone_after = changes.get("phone_number", user.phone_number)
    if not email_after and not phone_after:
        _add_error(errors, "login", _CONTACT_REQUIRED)

    conflicts = await _find_conflicts(session, values=changes, exclude_id=user.id)
    for field, messages in conflicts.items():
        errors.setdefault(field, []).extend(messages)
    if errors:
        raise ValidationError(errors)

    for field, value in changes.items():
        setattr(user, field, value)
    if new_password is not None:
        user.hashed_password = get_password_hash(new_password)
    await _commit_or_conflict(session, changes, exclude_id=user.id)
    await session.refresh(user)
    return user
