"""
Translation of Supabase/PostgREST failures into HTTP errors.
The backend's own message is passed through unchanged so the client can show it.
"""

import logging

from fastapi import HTTPException
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# Postgres / PostgREST error codes -> HTTP status
STATUS_BY_ERROR_CODE = {
    "42501": 403,     # insufficient_privilege: row-level security denial
    "23503": 400,     # foreign_key_violation
    "23505": 409,     # unique_violation
    "23502": 400,     # not_null_violation
    "22P02": 400,     # invalid_text_representation (malformed uuid / numeric)
    "PGRST116": 404,  # .single() matched no rows
    "PGRST301": 401,  # JWT invalid or expired
    "PGRST302": 401,  # anonymous access disabled, bearer token required
    "PGRST303": 401,  # JWT claims validation failed
}


def to_http_exception(exc: Exception) -> HTTPException:
    """Map an exception raised while talking to Supabase to an HTTPException."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, APIError):
        status_code = STATUS_BY_ERROR_CODE.get(exc.code or "", 500)
        message = exc.message or str(exc)
        if status_code >= 500:
            logger.error("Supabase request failed (%s): %s", exc.code, message)
        else:
            logger.warning("Supabase rejected request (%s): %s", exc.code, message)
        return HTTPException(status_code=status_code, detail=message)
    logger.error("Supabase request failed: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))
