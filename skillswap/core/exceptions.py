"""
Domain error taxonomy shared by the matching, connection, skill ledger,
vouch and message services.

Services raise these; ``skillswap.api.errors`` maps them to HTTP responses.
Conflicts use 400 to stay compatible with the existing web client, which
treats duplicate requests and already-processed requests as bad requests.
"""

from __future__ import annotations

from fastapi import status


class SkillSwapError(Exception):
    """Base class for domain errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class NotFoundError(SkillSwapError):
    """Referenced user, skill, connection or vouch does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class InvalidRequestError(SkillSwapError):
    """Malformed input, e.g. a self-reference where it is disallowed."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"


class ForbiddenError(SkillSwapError):
    """Caller is not the party allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not authorized"


class ConflictError(SkillSwapError):
    """Uniqueness or state-machine invariant would be violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Conflict"
