"""Main application module."""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import config
import models
from database import engine
from logging_config import get_logger, setup_logging
import auth_routes
import post_routes

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = get_logger("app")

app = FastAPI(title="Blog API")
models.Base.metadata.create_all(bind=engine)

app.include_router(auth_routes.router, prefix="/api")
app.include_router(post_routes.router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed payloads with 400 and the validator's error list"""
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Log store failures and hide their details from the client"""
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "Internal server error"})
