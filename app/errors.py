"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from fastapi import status


class WorkflowError(Exception):
    """
    Base class for every error raised by the donation workflow.

    Each subclass carries a stable ``kind`` string and the HTTP status the API
    layer answers with.
    """

    kind = "workflow_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkflowError):
    kind = "validation"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(WorkflowError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(WorkflowError):
    kind = "authorization"
    status_code = status.HTTP_403_FORBIDDEN


class StateConflictError(WorkflowError):
    kind = "state_conflict"
    status_code = status.HTTP_409_CONFLICT


class ResourceConflictError(StateConflictError):
    kind = "resource_conflict"


class OTPExpiredError(WorkflowError):
    kind = "otp_expired"
    status_code = status.HTTP_410_GONE


class OTPMismatchError(WorkflowError):
    kind = "otp_mismatch"
    status_code = status.HTTP_400_BAD_REQUEST
