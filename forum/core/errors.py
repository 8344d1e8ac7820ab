# forum/core/errors.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from forum.core.json import UTF8JSONResponse

log = logging.getLogger("uvicorn")


def field_errors(exc: ValidationError | RequestValidationError) -> list[dict]:
    """Errores de validación por campo, sin detalles internos de pydantic."""
    out: list[dict] = []
    for err in exc.errors():
        # quitamos 'body' / 'query' del loc para dejar solo el nombre del campo
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        out.append({"field": ".".join(loc), "message": err.get("msg", "invalid value")})
    return out


def validation_detail(exc: ValidationError | RequestValidationError) -> dict:
    return {"message": "validation error", "errors": field_errors(exc)}


INVALID_JSON = {"message": "validation error", "errors": [{"field": "", "message": "invalid JSON body"}]}


async def _on_request_validation(request: Request, exc: RequestValidationError):
    # /api/topics/abc: un id que no es número no existe → 404, no 400
    errors = exc.errors()
    if errors and all((err.get("loc") or ("",))[0] == "path" for err in errors):
        return UTF8JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "not found"},
        )
    return UTF8JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": validation_detail(exc)},
    )


async def _on_store_error(request: Request, exc: SQLAlchemyError):
    # red de seguridad: los routers ya capturan, pero nada del driver sale al cliente
    log.exception(f"❌ error de base de datos en {request.method} {request.url.path}")
    return UTF8JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "internal error"},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _on_request_validation)
    app.add_exception_handler(SQLAlchemyError, _on_store_error)
