"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Wed Jul 09 2025
# SPDX-License-Identifier: MIT
"""

import secrets

from passlib.context import CryptContext

otp_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def generate_otp(length: int) -> str:
    """
    Returns a numeric one-time code of exactly ``length`` digits.
    """
    return "".join(secrets.choice("0123456789") for _ in range(length))


def get_otp_hash(code: str) -> str:
    return otp_context.hash(code)


def verify_otp_hash(code: str, otp_hash: str) -> bool:
    return otp_context.verify(code, otp_hash)
