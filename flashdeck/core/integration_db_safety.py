from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.engine import URL, make_url

TEST_DATABASE_NAME_RE = re.compile(r"test", re.IGNORECASE)
LOCAL_DATABASE_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "postgres", "flashdeck_postgres"})


@dataclass(frozen=True, slots=True)
class IntegrationDbCheck:
    is_safe: bool
    reason: str
    database_name: str
    host: str


def _unsafe_reason(url: URL, database_name: str, host: str) -> str | None:
    if url.get_backend_name() != "postgresql":
        return "integration tests run only against PostgreSQL"
    if not database_name:
        return "database name is empty"
    if TEST_DATABASE_NAME_RE.search(database_name) is None:
        return "database name must contain 'test'"
    if host not in LOCAL_DATABASE_HOSTS:
        return f"host '{host}' is not a local test host"
    return None


def check_integration_db(database_url: str) -> IntegrationDbCheck:
    """Decides whether `database_url` may be truncated between integration tests."""
    url = make_url(database_url)
    database_name = (url.database or "").strip()
    host = (url.host or "").strip().lower()
    reason = _unsafe_reason(url, database_name, host)
    return IntegrationDbCheck(
        is_safe=reason is None,
        reason=reason or "ok",
        database_name=database_name,
        host=host,
    )

