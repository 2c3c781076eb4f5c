"""
Field-level coercion and shape checks.

These raise `ValueError` with a user-facing message so they can be called
from pydantic validators (the message is surfaced verbatim as a 400) and
directly from services.
"""
from typing import Any, List, Optional

from pydantic import AnyUrl, EmailStr, TypeAdapter, ValidationError

from learn_note.models.resource import RESOURCE_TYPES

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt ignores anything past 72 bytes

_uri_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


def coerce_title(value: Any, label: str = "Title") -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"{label} must be a string")
    value = str(value)
    if not value.strip():
        raise ValueError(f"{label} is required")
    return value


def coerce_parent(value: Any, required: bool = False) -> Optional[int]:
    if value is None:
        if required:
            raise ValueError("Parent id is required")
        return None
    if isinstance(value, bool):
        raise ValueError("Parent is invalid.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError("Parent is invalid.")


def check_notebook(value: Any) -> dict:
    # the notebook is opaque; only the top-level delta shape is checked
    if not isinstance(value, dict) or not isinstance(value.get("ops"), list):
        raise ValueError("Notebook must be a JSON object with an ops array")
    return value


def check_id_list(value: Any, label: str) -> List[int]:
    if not isinstance(value, list):
        raise ValueError(f"{label} must be an array of ids")
    ids = []
    for item in value:
        try:
            ids.append(coerce_parent(item, required=True))
        except ValueError:
            raise ValueError(f"{label} must be an array of ids")
    return ids


def check_uri(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Uri is required")
    try:
        _uri_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("Uri is not valid")
    if "://" not in value:
        raise ValueError("Uri is not valid")
    return value


def check_resource_type(value: Any) -> str:
    if value not in RESOURCE_TYPES:
        raise ValueError("Only allowed values for `type` are `youtube` and `other`")
    return value


def check_untrimmed(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    if value.strip() != value:
        raise ValueError(f"{field} cannot start or end with whitespace")
    return value


def check_email(value: Any) -> str:
    value = check_untrimmed(value, "email")
    # validated only; the address is stored exactly as sent so login can match it
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("Email is not valid")
    return value


def check_password(value: Any) -> str:
    value = check_untrimmed(value, "password")
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(value) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"password must be at most {PASSWORD_MAX_LENGTH} characters long")
    return value
