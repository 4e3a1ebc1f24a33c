"""Saved content and plan usage accounting.

Sessions are persisted only through ``save_session``. The hosted backend is a
PostgREST endpoint (Supabase); ``InMemoryContentRepository`` stands in for it
in tests and offline CLI runs.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from calendar import monthrange
from datetime import datetime, timezone
from typing import Any

import requests

from content_wizard.errors import StorageError, UsageLimitError
from content_wizard.models import ContentRecord, Plan, Session, UsageInfo

LOGGER = logging.getLogger(__name__)

TABLE = "user_content"

PLANS: dict[str, Plan] = {
    "free": Plan(name="Free", limit=5, price=0),
    "pro": Plan(name="Pro", limit=20, price=29),
    "business": Plan(name="Business", limit=50, price=79),
}


def get_plan(plan_id: str) -> Plan:
    try:
        return PLANS[plan_id.lower()]
    except KeyError:
        raise StorageError(f"Invalid plan configuration for: {plan_id}") from None


def current_period(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Calendar-month billing window containing ``now`` (UTC)."""
    now = now or datetime.now(timezone.utc)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    last_day = monthrange(now.year, now.month)[1]
    end = now.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999999)
    return start, end


# ── Repositories ──────────────────────────────────────────────────────


class ContentRepository(ABC):
    """CRUD over saved content records."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[ContentRecord]:
        ...

    @abstractmethod
    def get(self, record_id: str) -> ContentRecord | None:
        ...

    @abstractmethod
    def insert(self, record: ContentRecord) -> ContentRecord:
        ...

    @abstractmethod
    def update(self, record: ContentRecord) -> ContentRecord:
        ...

    @abstractmethod
    def delete(self, record_id: str) -> None:
        ...

    @abstractmethod
    def count_in_period(self, user_id: str, start: datetime, end: datetime) -> int:
        ...


class InMemoryContentRepository(ContentRepository):
    def __init__(self):
        self._records: dict[str, ContentRecord] = {}

    def list_for_user(self, user_id: str) -> list[ContentRecord]:
        records = [r for r in self._records.values() if r.user_id == user_id]
        records = sorted(records, key=lambda r: r.updated_at, reverse=True)
        return [r.model_copy(deep=True) for r in records]

    def get(self, record_id: str) -> ContentRecord | None:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record else None

    def insert(self, record: ContentRecord) -> ContentRecord:
        if record.id in self._records:
            raise StorageError(f"Record {record.id} already exists")
        self._records[record.id] = record.model_copy(deep=True)
        return record

    def update(self, record: ContentRecord) -> ContentRecord:
        if record.id not in self._records:
            raise StorageError(f"Record {record.id} not found")
        self._records[record.id] = record.model_copy(deep=True)
        return record

    def delete(self, record_id: str) -> None:
        self._records.pop(record_id, None)

    def count_in_period(self, user_id: str, start: datetime, end: datetime) -> int:
        return sum(
            1 for r in self._records.values()
            if r.user_id == user_id and start <= r.created_at <= end
        )


class SupabaseContentRepository(ContentRepository):
    """Talks to the ``user_content`` table through the PostgREST API.

    Args:
        url: Project URL, e.g. ``https://xyz.supabase.co``.
        api_key: Service or anon key, sent as both ``apikey`` and bearer token.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, url: str, api_key: str, timeout: float = 30.0, http: requests.Session | None = None):
        self.base = f"{url.rstrip('/')}/rest/v1/{TABLE}"
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_env(cls) -> SupabaseContentRepository:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_KEY")
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables are required")
        return cls(url, key)

    def _request(self, method: str, params: list[tuple[str, str]] | None = None, **kwargs) -> Any:
        try:
            resp = self.http.request(method, self.base, params=params, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            LOGGER.warning("Backend %s failed: %s", method, e)
            raise StorageError(f"Backend request failed: {e}") from e
        if not resp.content:
            return None
        return resp.json()

    @staticmethod
    def _row(record: ContentRecord) -> dict[str, Any]:
        return record.model_dump(mode="json")

    def list_for_user(self, user_id: str) -> list[ContentRecord]:
        rows = self._request("GET", [("user_id", f"eq.{user_id}"), ("order", "updated_at.desc")])
        return [ContentRecord.model_validate(row) for row in rows or []]

    def get(self, record_id: str) -> ContentRecord | None:
        rows = self._request("GET", [("id", f"eq.{record_id}")])
        return ContentRecord.model_validate(rows[0]) if rows else None

    def insert(self, record: ContentRecord) -> ContentRecord:
        rows = self._request(
            "POST", json=self._row(record), headers={"Prefer": "return=representation"}
        )
        return ContentRecord.model_validate(rows[0]) if rows else record

    def update(self, record: ContentRecord) -> ContentRecord:
        rows = self._request(
            "PATCH",
            [("id", f"eq.{record.id}")],
            json=self._row(record),
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise StorageError(f"Record {record.id} not found")
        return ContentRecord.model_validate(rows[0])

    def delete(self, record_id: str) -> None:
        self._request("DELETE", [("id", f"eq.{record_id}")])

    def count_in_period(self, user_id: str, start: datetime, end: datetime) -> int:
        rows = self._request(
            "GET",
            [
                ("select", "id"),
                ("user_id", f"eq.{user_id}"),
                ("created_at", f"gte.{start.isoformat()}"),
                ("created_at", f"lte.{end.isoformat()}"),
            ],
        )
        return len(rows or [])


# ── Usage accounting ──────────────────────────────────────────────────


def check_usage(
    repository: ContentRepository,
    user_id: str,
    plan_id: str = "free",
    period_start: datetime | None = None,
    period_end: datetime | None = None,
) -> UsageInfo:
    """Count the pieces created in the billing window against the plan limit."""
    plan = get_plan(plan_id)
    if period_start is None or period_end is None:
        period_start, period_end = current_period()
    count = repository.count_in_period(user_id, period_start, period_end)
    usage = UsageInfo(content_count=count, limit=plan.limit, period_start=period_start, period_end=period_end)
    LOGGER.info("%d/%d pieces used this month (%d remaining)", count, plan.limit, usage.remaining)
    return usage


def ensure_can_create(
    repository: ContentRepository,
    user_id: str,
    plan_id: str = "free",
    period_start: datetime | None = None,
    period_end: datetime | None = None,
) -> UsageInfo:
    """Like ``check_usage`` but raises when no credits are left.

    Raises:
        UsageLimitError: The plan limit for the period is reached.
    """
    usage = check_usage(repository, user_id, plan_id, period_start, period_end)
    if not usage.has_credits:
        raise UsageLimitError(
            f"Content limit reached: {usage.content_count}/{usage.limit} pieces used this month"
        )
    return usage


def save_session(repository: ContentRepository, session: Session, user_id: str) -> ContentRecord:
    """Insert the session as a new record, or update the one it was saved as.

    Sets ``session.current_id`` after the first insert so later saves update.
    """
    if session.content_type is None:
        raise StorageError("Cannot save a session without a content type")

    fields = dict(
        user_id=user_id,
        content_type=session.content_type,
        topic=session.topic,
        title=session.title,
        outline=session.outline,
        content=session.content,
        keywords=session.selected_keywords or session.keywords,
        meta_description=session.meta_description,
        platform=session.platform,
    )

    existing = repository.get(session.current_id) if session.current_id else None
    if existing is not None:
        record = existing.model_copy(update={**fields, "updated_at": datetime.now(timezone.utc)})
        saved = repository.update(record)
        LOGGER.info("Updated content %s", saved.id)
    else:
        saved = repository.insert(ContentRecord(**fields))
        LOGGER.info("Saved new content %s", saved.id)

    session.current_id = saved.id
    return saved
