"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Tue Jul 08 2025
# SPDX-License-Identifier: MIT
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.config import settings
from app.crud import crud_profile
from app.db.database import get_db
from app.schemas import schemas
from app.services.workflow_orchestrator import WorkflowOrchestrator


def verify_token(token: str, credentials_exception: HTTPException) -> schemas.TokenData:
    """
    Verifies a JWT token issued by the authentication service and returns its claims.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
        token_data = schemas.TokenData(user_id=int(subject), role=payload.get("role"))
    except (JWTError, ValueError, PydanticValidationError):
        raise credentials_exception
    return token_data


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/login")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a JWT access token.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def get_current_actor(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> schemas.Actor:
    """
    FastAPI dependency resolving the bearer token to the acting user.

    The role comes from the stored user, so a token cannot claim a role the
    account does not have.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_data = verify_token(token, credentials_exception)
    user = crud_profile.get_user(db, token_data.user_id)
    if user is None:
        raise credentials_exception
    if token_data.role is not None and token_data.role != user.role:
        raise credentials_exception
    return schemas.Actor.model_validate(user)


def get_orchestrator(db: Session = Depends(get_db)) -> WorkflowOrchestrator:
    return WorkflowOrchestrator(db, settings)
