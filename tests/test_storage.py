import json
from datetime import datetime, timezone

import pytest
import requests

from content_wizard.errors import StorageError, UsageLimitError
from content_wizard.models import ContentRecord, ContentType, NodeKind, OutlineNode, Session
from content_wizard.storage import (
    ContentRepository,
    InMemoryContentRepository,
    SupabaseContentRepository,
    check_usage,
    current_period,
    ensure_can_create,
    get_plan,
    save_session,
)

MARCH = (
    datetime(2026, 3, 1, tzinfo=timezone.utc),
    datetime(2026, 3, 31, 23, 59, 59, tzinfo=timezone.utc),
)


def _record(user_id="user-1", created_at=datetime(2026, 3, 10, tzinfo=timezone.utc), **fields):
    return ContentRecord(
        user_id=user_id,
        content_type=ContentType.BLOG_POST,
        created_at=created_at,
        updated_at=created_at,
        **fields,
    )


@pytest.fixture
def repository():
    return InMemoryContentRepository()


# ── Plans and periods ─────────────────────────────────────────────────


def test_plans():
    assert get_plan("free").limit == 5
    assert get_plan("Pro").limit == 20
    assert get_plan("business").price == 79
    with pytest.raises(StorageError):
        get_plan("enterprise")


def test_current_period_is_calendar_month():
    start, end = current_period(datetime(2026, 2, 14, 9, 30, tzinfo=timezone.utc))
    assert start == datetime(2026, 2, 1, tzinfo=timezone.utc)
    assert (end.month, end.day, end.hour) == (2, 28, 23)


# ── In-memory repository ──────────────────────────────────────────────


def test_insert_get_update_delete(repository):
    record = repository.insert(_record(title="Draft"))
    assert repository.get(record.id).title == "Draft"

    with pytest.raises(StorageError):
        repository.insert(record)

    repository.update(record.model_copy(update={"title": "Final"}))
    assert repository.get(record.id).title == "Final"

    repository.delete(record.id)
    assert repository.get(record.id) is None
    with pytest.raises(StorageError):
        repository.update(record)


def test_list_for_user_newest_first(repository):
    old = repository.insert(_record(created_at=datetime(2026, 3, 2, tzinfo=timezone.utc)))
    new = repository.insert(_record(created_at=datetime(2026, 3, 20, tzinfo=timezone.utc)))
    repository.insert(_record(user_id="someone-else"))
    assert [r.id for r in repository.list_for_user("user-1")] == [new.id, old.id]


def test_listed_records_are_copies(repository):
    record = repository.insert(_record(title="Draft", keywords=["seo"]))
    listed = repository.list_for_user("user-1")[0]
    listed.title = "Changed"
    listed.keywords.append("spam")
    stored = repository.get(record.id)
    assert stored.title == "Draft"
    assert stored.keywords == ["seo"]


def test_repository_is_abstract():
    with pytest.raises(TypeError):
        ContentRepository()


# ── Usage accounting ──────────────────────────────────────────────────


def test_check_usage_counts_only_the_period(repository):
    repository.insert(_record())
    repository.insert(_record())
    repository.insert(_record(created_at=datetime(2026, 2, 27, tzinfo=timezone.utc)))
    repository.insert(_record(user_id="someone-else"))

    usage = check_usage(repository, "user-1", "free", *MARCH)
    assert usage.content_count == 2
    assert usage.limit == 5
    assert usage.remaining == 3
    assert usage.has_credits


def test_ensure_can_create_raises_at_limit(repository):
    for _ in range(5):
        repository.insert(_record())
    with pytest.raises(UsageLimitError, match="5/5 pieces used this month"):
        ensure_can_create(repository, "user-1", "free", *MARCH)
    assert ensure_can_create(repository, "user-1", "pro", *MARCH).remaining == 15


# ── Saving sessions ───────────────────────────────────────────────────


def _session():
    return Session(
        content_type=ContentType.BLOG_POST,
        topic="Digital marketing for small businesses",
        title="The Small Business Marketing Playbook",
        keywords=["seo", "marketing"],
        selected_keywords=["local seo"],
        outline=[OutlineNode(kind=NodeKind.H1, text="Intro")],
        content="<h1>Intro</h1><p>Hello.</p>",
        meta_description="Hello.",
    )


def test_save_session_inserts_then_updates(repository):
    session = _session()
    first = save_session(repository, session, "user-1")
    assert session.current_id == first.id
    assert first.keywords == ["local seo"]
    assert first.outline[0].text == "Intro"

    session.title = "Renamed"
    second = save_session(repository, session, "user-1")
    assert second.id == first.id
    assert second.created_at == first.created_at
    assert len(repository.list_for_user("user-1")) == 1
    assert repository.get(first.id).title == "Renamed"


def test_save_session_requires_content_type(repository):
    with pytest.raises(StorageError):
        save_session(repository, Session(), "user-1")


# ── Supabase repository ───────────────────────────────────────────────


def _response(status=200, body=None):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Server Error"
    resp.url = "https://project.supabase.co/rest/v1/user_content"
    resp._content = json.dumps(body).encode() if body is not None else b""
    return resp


class FakeHttp:
    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def _supabase(*responses):
    http = FakeHttp(*responses)
    return SupabaseContentRepository("https://project.supabase.co/", "secret", http=http), http


def test_supabase_sends_auth_headers():
    _, http = _supabase()
    assert http.headers["apikey"] == "secret"
    assert http.headers["Authorization"] == "Bearer secret"


def test_supabase_list_for_user():
    row = _record(title="Saved").model_dump(mode="json")
    repo, http = _supabase(_response(body=[row]))
    records = repo.list_for_user("user-1")
    assert records[0].title == "Saved"
    sent = http.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "https://project.supabase.co/rest/v1/user_content"
    assert ("user_id", "eq.user-1") in sent["params"]
    assert ("order", "updated_at.desc") in sent["params"]


def test_supabase_insert_asks_for_representation():
    record = _record(title="New")
    repo, http = _supabase(_response(201, [record.model_dump(mode="json")]))
    saved = repo.insert(record)
    assert saved.id == record.id
    assert http.requests[0]["headers"] == {"Prefer": "return=representation"}
    assert http.requests[0]["json"]["content_type"] == "Blog Post"


def test_supabase_update_missing_row():
    repo, _ = _supabase(_response(body=[]))
    with pytest.raises(StorageError):
        repo.update(_record())


def test_supabase_count_in_period_filters_dates():
    repo, http = _supabase(_response(body=[{"id": "a"}, {"id": "b"}]))
    assert repo.count_in_period("user-1", *MARCH) == 2
    params = http.requests[0]["params"]
    assert ("created_at", f"gte.{MARCH[0].isoformat()}") in params
    assert ("created_at", f"lte.{MARCH[1].isoformat()}") in params


def test_supabase_delete_with_empty_body():
    repo, http = _supabase(_response(204))
    repo.delete("abc")
    assert http.requests[0]["params"] == [("id", "eq.abc")]


@pytest.mark.parametrize("failure", [
    _response(500, {"message": "boom"}),
    requests.ConnectionError("connection refused"),
])
def test_supabase_failures_become_storage_errors(failure):
    repo, _ = _supabase(failure)
    with pytest.raises(StorageError):
        repo.get("abc")


def test_from_env(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    with pytest.raises(ValueError):
        SupabaseContentRepository.from_env()

    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "secret")
    repo = SupabaseContentRepository.from_env()
    assert repo.base == "https://project.supabase.co/rest/v1/user_content"
