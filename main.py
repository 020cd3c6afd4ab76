# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

# Entry point for `uvicorn main:app`; the application and its lifespan live in app.app.
from app.app import app  # noqa: F401
