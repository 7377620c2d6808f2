"""
Server-side session storage.

A session record binds an opaque session id to a user id together with the
anti-forgery token issued for it. ``InMemorySessionStore`` serves tests and
local runs; ``OracleSessionStore`` keeps sessions in the ``SESSIONS`` table.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

import pandas as pd

from code_modules.oracle_adb_handler import OracleADBClient
from code_modules.sql_queries_loader import SqlQueryLoader


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    user_id: int
    csrf_token: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class InMemorySessionStore:
    """
    Dict-backed session store guarded by a lock.
    """

    def __init__(self):
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: SessionRecord) -> None:
        with self._lock:
            self._sessions[record.session_id] = record

    def get(self, session_id: str) -> Optional[SessionRecord]:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self):
        return len(self._sessions)


def _as_utc(value) -> datetime:
    # Oracle TIMESTAMP columns come back naive and hold UTC.
    return pd.Timestamp(value).to_pydatetime().replace(tzinfo=timezone.utc)


class OracleSessionStore:
    """
    Session store on top of the ``SESSIONS`` table.
    """

    def __init__(self, adb_client: OracleADBClient, sql_loader: Optional[SqlQueryLoader] = None):
        self.adb_client = adb_client
        self.sql_loader = sql_loader or SqlQueryLoader()

    def save(self, record: SessionRecord) -> None:
        insert = self.sql_loader.insert_session(
            record.session_id,
            record.user_id,
            record.csrf_token,
            record.created_at,
            record.expires_at,
        )
        self.adb_client.execute_single_non_query(insert["query"], insert["params"])

    def get(self, session_id: str) -> Optional[SessionRecord]:
        select = self.sql_loader.session_by_id(session_id)
        df = self.adb_client.execute_query_df(select["query"], select["params"])
        if df.empty:
            return None
        row = df.to_dict(orient="records")[0]
        return SessionRecord(
            session_id=row["SESSION_ID"],
            user_id=int(row["USER_ID"]),
            csrf_token=row["CSRF_TOKEN"],
            created_at=_as_utc(row["CREATED_AT"]),
            expires_at=_as_utc(row["EXPIRES_AT"]),
        )

    def delete(self, session_id: str) -> None:
        delete = self.sql_loader.delete_session(session_id)
        self.adb_client.execute_single_non_query(delete["query"], delete["params"])
