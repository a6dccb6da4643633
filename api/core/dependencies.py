"""
Shared FastAPI dependencies.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database


def get_db(request: Request) -> Database:
    # Set once by the app lifespan; tests override this dependency.
    return request.app.state.db
