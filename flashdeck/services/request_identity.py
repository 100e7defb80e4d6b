from __future__ import annotations

from fastapi import Request

USER_ID_HEADER = "X-User-Id"


class InvalidUserIdError(ValueError):
    pass


def parse_user_id(raw_value: str | None) -> int | None:
    """Parses the caller id header; absent or blank means the guest owner."""
    if raw_value is None:
        return None
    candidate = raw_value.strip()
    if not candidate:
        return None
    if not candidate.isdecimal():
        raise InvalidUserIdError(f"{USER_ID_HEADER} must be a positive integer")
    user_id = int(candidate)
    if user_id <= 0:
        raise InvalidUserIdError(f"{USER_ID_HEADER} must be a positive integer")
    return user_id


def extract_user_id(request: Request) -> int | None:
    return parse_user_id(request.headers.get(USER_ID_HEADER))
