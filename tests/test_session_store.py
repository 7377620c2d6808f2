from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pandas as pd
import pytest

from code_modules.session_store import InMemorySessionStore, OracleSessionStore, SessionRecord

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def record():
    return SessionRecord(
        session_id="sess-1",
        user_id=1,
        csrf_token="csrf-1",
        created_at=NOW,
        expires_at=NOW + timedelta(hours=2),
    )


def test_is_expired(record):
    assert not record.is_expired(NOW)
    assert record.is_expired(NOW + timedelta(hours=2))


def test_in_memory_round_trip(record):
    store = InMemorySessionStore()

    store.save(record)
    assert store.get("sess-1") == record
    assert len(store) == 1

    store.delete("sess-1")
    store.delete("sess-1")
    assert store.get("sess-1") is None


def test_oracle_save_binds_naive_utc(record):
    adb_client = MagicMock()

    OracleSessionStore(adb_client).save(record)

    query, params = adb_client.execute_single_non_query.call_args.args
    assert "INSERT INTO SESSIONS" in query
    assert params["session_id"] == "sess-1"
    assert params["created_at"] == datetime(2026, 3, 1, 12, 0)
    assert params["created_at"].tzinfo is None


def test_oracle_get(record):
    adb_client = MagicMock()
    adb_client.execute_query_df.return_value = pd.DataFrame(
        [{
            "SESSION_ID": "sess-1",
            "USER_ID": 1,
            "CSRF_TOKEN": "csrf-1",
            "CREATED_AT": pd.Timestamp("2026-03-01 12:00:00"),
            "EXPIRES_AT": pd.Timestamp("2026-03-01 14:00:00"),
        }]
    )

    assert OracleSessionStore(adb_client).get("sess-1") == record


def test_oracle_get_missing():
    adb_client = MagicMock()
    adb_client.execute_query_df.return_value = pd.DataFrame()

    assert OracleSessionStore(adb_client).get("nope") is None


def test_oracle_delete():
    adb_client = MagicMock()

    OracleSessionStore(adb_client).delete("sess-1")

    query, params = adb_client.execute_single_non_query.call_args.args
    assert query.startswith("DELETE FROM SESSIONS")
    assert params == {"session_id": "sess-1"}
