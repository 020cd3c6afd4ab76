# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.v1.endpoints import donation_requests, donations, ngos
from app.config import settings
from app.db.database import Database, get_db
from app.errors import WorkflowError
from app.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    app.state.database = Database()
    logger.info("FoodShare workflow API starting up. Database migrations are managed by Alembic.")
    yield
    app.state.database.dispose()
    logger.info("FoodShare workflow API shutting down.")


app = FastAPI(
    title="FoodShare Workflow API",
    description="Donation workflow: NGO claims, volunteer pickup teams and OTP-confirmed pickups.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "kind": exc.kind})


app.include_router(donations.router, prefix="/api/v1")
app.include_router(donation_requests.router, prefix="/api/v1")
app.include_router(ngos.router, prefix="/api/v1")


@app.get("/")
async def read_root():
    return {"message": "Welcome to the FoodShare Workflow API!"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database_connection": "successful"}
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection failed: {e}",
        )
