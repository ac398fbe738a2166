"""
Translation of domain exceptions into HTTP errors for route handlers.
"""
from fastapi import HTTPException

from app.core.exceptions import LeagueHubError


def to_http_exception(exc: LeagueHubError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)
