import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .errors import AppError
from .routes import api_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="bookkeeper")

app.include_router(api_router)


@app.exception_handler(AppError)
def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    logger.info("Rejected request to %s: %s", request.url.path, first.get("msg"))
    return JSONResponse(
        status_code=400,
        content={
            "error": first.get("msg", "Invalid request."),
            "field": ".".join(location) or None,
        },
    )


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}
