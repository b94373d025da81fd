"""
Tests for the persistence gateway's retry and probe behavior.
"""
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from tripmaster.db.session import call_with_retry, is_transient_error
from tripmaster.models import Memo


def _operational(message):
    return OperationalError("SELECT 1", {}, Exception(message))


class Flaky:
    """Callable failing with the given errors before succeeding."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


def test_transient_error_detection():
    assert is_transient_error(_operational("Connection reset by peer"))
    assert is_transient_error(_operational("(2003, \"Can't connect\": timed out)"))
    assert is_transient_error(_operational("could not translate host name \"db\""))
    assert not is_transient_error(_operational("no such table: budgets"))
    assert not is_transient_error(IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))


def test_retries_once_on_transient_error():
    func = Flaky(_operational("Connection reset by peer"))
    rollbacks = []
    assert call_with_retry(func, delay=0, on_retry=lambda: rollbacks.append(1)) == "ok"
    assert func.calls == 2
    assert rollbacks == [1]


def test_second_transient_failure_propagates():
    func = Flaky(_operational("Connection reset by peer"), _operational("Connection reset by peer"))
    with pytest.raises(OperationalError):
        call_with_retry(func, delay=0)
    assert func.calls == 2


def test_non_transient_error_is_not_retried():
    func = Flaky(_operational("no such table: budgets"))
    with pytest.raises(OperationalError):
        call_with_retry(func, delay=0)
    assert func.calls == 1


def test_query_returns_rows(database):
    rows = database.query("SELECT :value AS answer", {"value": 42})
    assert rows == [{"answer": 42}]


def test_probe(database, monkeypatch):
    assert database.probe(attempts=1, delay=0) is True

    calls = []

    def broken(statement, params=None):
        calls.append(statement)
        raise _operational("Connection refused")

    monkeypatch.setattr(database, "query", broken)
    assert database.probe(attempts=3, delay=0) is False
    assert len(calls) == 3


def test_read_paths_retry_on_disconnect(client, auth_headers, monkeypatch):
    headers = auth_headers()
    client.post("/api/memos", headers=headers, json={"title": "Keep"})

    failures = [_operational("Lost connection to MySQL server during query")]
    real_query = Session.query

    def flaky_query(self, *entities, **kwargs):
        if failures and entities and entities[0] is Memo:
            raise failures.pop(0)
        return real_query(self, *entities, **kwargs)

    monkeypatch.setattr(Session, "query", flaky_query)

    response = client.get("/api/memos", headers=headers)
    assert response.status_code == 200
    assert [m["title"] for m in response.json()] == ["Keep"]
    assert failures == []
