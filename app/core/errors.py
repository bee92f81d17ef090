# app/core/errors.py
"""
Errores de la API.

- ApiError  -> {"msg": "..."} con el status indicado (400/401/404).
- FieldError -> {"errors": [{"msg": "..."}]} (400), mismo formato que la
  validación del body.
- Cualquier otra excepción que escape de un handler se loguea y se
  responde como texto plano "Server Error" (500), sin detalle.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.responses import PlainTextResponse

from app.core.json import msg_response, errors_response

log = logging.getLogger("uvicorn")


class ApiError(Exception):
    def __init__(self, status_code: int, msg: str):
        super().__init__(msg)
        self.status_code = status_code
        self.msg = msg


class FieldError(Exception):
    def __init__(self, msg: str, param: str | None = None, location: str = "body"):
        super().__init__(msg)
        self.msg = msg
        self.param = param
        self.location = location

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"msg": self.msg, "location": self.location}
        if self.param:
            out["param"] = self.param
        return out


def _validation_item(err: dict[str, Any]) -> dict[str, Any]:
    """
    Traduce un error de pydantic al formato {msg, param, location}.
    Los ValueError de nuestros validators traen el mensaje final en ctx.
    """
    loc = err.get("loc") or ()
    ctx = err.get("ctx") or {}
    if err.get("type") == "value_error" and "error" in ctx:
        msg = str(ctx["error"])
    else:
        msg = err.get("msg", "Invalid value")

    item: dict[str, Any] = {"msg": msg, "location": str(loc[0]) if loc else "body"}
    if len(loc) > 1 and isinstance(loc[-1], str):
        item["param"] = loc[-1]
    return item


def _is_missing_body(err: dict[str, Any]) -> bool:
    return err.get("type") == "missing" and tuple(err.get("loc") or ()) == ("body",)


def _empty_body_items(request: Request) -> list[dict[str, Any]] | None:
    """
    Request sin body: valida el modelo del endpoint contra {} para que
    salgan los mensajes por campo ("Text is required", ...).
    """
    route = request.scope.get("route")
    dependant = getattr(route, "dependant", None)
    if dependant is None or len(dependant.body_params) != 1:
        return None
    model = dependant.body_params[0].field_info.annotation
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        return None
    try:
        model.model_validate({})
    except ValidationError as e:
        return [
            _validation_item({**err, "loc": ("body", *err["loc"])})
            for err in e.errors()
        ]
    return None


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return msg_response(exc.status_code, exc.msg)

    @app.exception_handler(FieldError)
    async def field_error_handler(request: Request, exc: FieldError):
        return errors_response([exc.as_dict()])

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(_is_missing_body(e) for e in errors):
            items = _empty_body_items(request)
            if items:
                return errors_response(items)
        return errors_response([_validation_item(e) for e in errors])

    @app.middleware("http")
    async def server_error_boundary(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            log.exception("❌ %s %s falló", request.method, request.url.path)
            return PlainTextResponse("Server Error", status_code=500)
