# app/core/json.py
from typing import Any
import json

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes ASCII. Pasa antes por jsonable_encoder
    para que datetime/date salgan en ISO 8601.
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def msg_response(status_code: int, msg: str) -> UTF8JSONResponse:
    """Cuerpo corto {"msg": ...} usado por todos los errores de negocio."""
    return UTF8JSONResponse(status_code=status_code, content={"msg": msg})


def errors_response(errors: list[dict], status_code: int = 400) -> UTF8JSONResponse:
    """Cuerpo {"errors": [{"msg": ...}, ...]} de validación."""
    return UTF8JSONResponse(status_code=status_code, content={"errors": errors})
