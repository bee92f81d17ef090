# app/core/validation.py
"""
Helpers para los validators de pydantic: cada campo lleva su propio
mensaje ("Text is required", ...) que luego viaja tal cual en
{"errors": [{"msg": ...}]}.
"""
from typing import Any

from email_validator import validate_email, EmailNotValidError


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def required(value: Any, msg: str) -> Any:
    if is_empty(value):
        raise ValueError(msg)
    return value


def valid_email(value: Any, msg: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(msg)
    try:
        info = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError(msg)
    # dominio en minúsculas, parte local tal cual
    return info.normalized
