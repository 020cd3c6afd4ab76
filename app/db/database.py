# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import os
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

Base = declarative_base()


def resolve_database_url() -> str:
    # Safety check: prevent production database access during testing
    if os.getenv("TESTING") == "1":
        return "sqlite:///:memory:"
    return settings.database_url


class Database:
    """
    Owns the engine and session factory for one running application.

    Created by the application lifespan and disposed on shutdown.
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or resolve_database_url()
        if self.url.startswith("sqlite"):
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.url:
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {"pool_pre_ping": True}
        self.engine = create_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Runs the enclosed block as one transaction: commit on success, rollback and
    re-raise on any error.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
