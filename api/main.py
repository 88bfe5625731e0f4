# api/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.errors import LibraryError
from core.sa.database import db
from api.routes import books, loans, users

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "unavailable": status.HTTP_400_BAD_REQUEST,
    "already_returned": status.HTTP_409_CONFLICT,
    "inventory_conflict": status.HTTP_400_BAD_REQUEST,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "store_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"

@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    db.init_db()
    yield

app = FastAPI(title="Library Loans API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        problems.append(f"{location}: {error['msg']}")
    return error_response(422, "Invalid request: " + "; ".join(problems))

@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(status_code, INTERNAL_ERROR_MESSAGE)
    return error_response(status_code, exc.message)

@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

@app.get("/api/health")
async def health():
    return {"success": True, "status": "ok"}

app.include_router(books.router)
app.include_router(loans.router)
app.include_router(users.router)
