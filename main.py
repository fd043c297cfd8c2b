# main.py
import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
# load env before anything reads os.getenv at import time (db, jwt)
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

import db
from routers import routers
from services.cascade import sweep_orphans
from utils.errors import AppError, UnavailableError
from utils.jwt_utils import init_identity_gate

import uvicorn

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("algodeck")

DEBUG = os.getenv("DEBUG", "").lower() in ("1", "true", "yes")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables, then heal dependents left behind by an interrupted cascade
    db.init_db()
    session = db.SessionLocal()
    try:
        sweep_orphans(session)
    finally:
        session.close()
    yield


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_error_handlers(app: FastAPI, debug: bool = DEBUG):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return _error(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
            message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
        else:
            message = "Invalid request"
        return _error(400, message)

    @app.exception_handler(OperationalError)
    async def store_unavailable_handler(request: Request, exc: OperationalError):
        logger.exception("Store unavailable during %s %s", request.method, request.url.path)
        err = UnavailableError("Service unavailable")
        return _error(err.status_code, err.message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error during %s %s", request.method, request.url.path)
        message = str(exc) if debug else "Something went wrong!"
        return _error(500, message)


def create_app(debug: bool = DEBUG) -> FastAPI:
    app = FastAPI(title="AlgoDeck API", lifespan=lifespan)

    # one-time setup of the identity gate, read by every authenticated route
    app.state.identity_gate = init_identity_gate()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, debug=debug)

    # routers
    for router in routers:
        app.include_router(router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "message": "AlgoDeck API is running"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")), reload=DEBUG)
