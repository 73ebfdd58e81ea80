from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartqr.core.exceptions import SmartQRError


def failure_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"success": False, "error": message}, status_code=status_code)


async def smartqr_error_handler(request: Request, exc: SmartQRError) -> JSONResponse:
    print(f"❌ {type(exc).__name__} khi xử lý {request.url.path}: {exc.message}")
    return failure_response(exc.message, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{field}: {error.get('msg')}" if field else error.get("msg", ""))
    message = "Invalid request body"
    if details:
        message = f"{message}: {'; '.join(details)}"
    print(f"⚠️ Request không hợp lệ tại {request.url.path}: {message}")
    return failure_response(message, 400)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and request.url.path.startswith("/api/"):
        return failure_response("API endpoint not found", 404)
    return await http_exception_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Không trả stack trace hay credentials về cho client
    print(f"❌ Lỗi không xác định khi xử lý {request.url.path}: {exc!r}")
    return failure_response("Internal server error", 500)


def setup_exception_handlers(app: FastAPI):
    app.add_exception_handler(SmartQRError, smartqr_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
