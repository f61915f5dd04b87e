"""Simple public, authenticated and administrator-only greeting endpoints."""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional

from suarakan.jwt import JwtClaims
from suarakan.models import ApiResponse

ADMIN_ROLE = "ADMIN"

_AUTH_FAILED = ApiResponse(HTTPStatus.UNAUTHORIZED, {"error": "Authentication failed"})


def public_message() -> str:
    """Return the text of the public landing route."""
    return "This is a public route that anyone can access"


def protected_message(claims: Optional[JwtClaims]) -> ApiResponse:
    """Greet any authenticated user with their role."""
    if claims is None:
        return _AUTH_FAILED
    return ApiResponse(
        HTTPStatus.OK,
        {"message": f"Hello, {claims.full_name}! Your role is: {claims.user_type}"},
    )


def admin_message(claims: Optional[JwtClaims]) -> ApiResponse:
    """Greet an administrator; refuse everyone else."""
    if claims is None:
        return _AUTH_FAILED
    if claims.user_type != ADMIN_ROLE:
        return ApiResponse(HTTPStatus.FORBIDDEN, {"error": "Admin access required"})
    return ApiResponse(
        HTTPStatus.OK,
        {
            "message": f"Hello, Admin {claims.full_name}! "
            "You have access to admin features."
        },
    )