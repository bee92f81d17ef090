# app/core/object_id.py
"""
Identificadores de 24 caracteres hex (4 bytes de timestamp + 8 aleatorios),
con la misma forma que los ObjectId que ya usan los clientes.
"""
import re
import secrets
import time

from fastapi import Path

from app.core.errors import ApiError

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str | None) -> bool:
    return bool(value and _OBJECT_ID_RE.match(value))


def object_id(param: str):
    """
    Dependencia que valida el path param `param` antes de entrar al handler
    (declarado con Path para que figure en OpenAPI).
    Devuelve el id normalizado a minúsculas.
    """

    async def _check(
        value: str = Path(alias=param, description="Id de 24 caracteres hex"),
    ) -> str:
        if not is_object_id(value):
            raise ApiError(400, "Invalid ID")
        return value.lower()

    return _check
