"""Application errors and the JSON error envelope returned for them."""


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base error carrying the HTTP status and a stable machine-readable code."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class NotFoundError(AppException):
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found", status_code=404, code="NOT_FOUND")


class RunInProgressError(AppException):
    """A compliance run was requested while another one still holds the run lock."""

    def __init__(self, message: str = "A compliance run is already in progress"):
        super().__init__(message, status_code=409, code="RUN_IN_PROGRESS")


def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
