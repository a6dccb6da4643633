"""
Request-level errors that never reach the store.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """
    A required request field is missing or falsy.
    """
