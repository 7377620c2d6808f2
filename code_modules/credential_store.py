"""
Credential store for RealEstateConnect users.

Two interchangeable implementations are provided:

- ``InMemoryUserRepository`` for tests and local development
- ``OracleUserRepository`` backed by the ``USERS`` table in Oracle ADB

Both enforce email uniqueness themselves and raise ``DuplicateEmailError``
when it would be violated. Emails are compared lower-cased.
"""
import itertools
import threading
from dataclasses import dataclass
from typing import Dict, Optional

import oracledb

from code_modules.oracle_adb_handler import OracleADBClient
from code_modules.sql_queries_loader import SqlQueryLoader


class DuplicateEmailError(Exception):
    """Raised when a user with the same email already exists."""


@dataclass(frozen=True)
class User:
    """
    A registered user. ``password_hash`` stays on the server.
    """
    id: int
    name: str
    email: str
    password_hash: str

    def projection(self) -> Dict[str, object]:
        """Fields that are safe to send to the client."""
        return {"id": self.id, "name": self.name, "email": self.email}


def normalize_email(email: str) -> str:
    return email.strip().lower()


class InMemoryUserRepository:
    """
    Process-local user store.
    """

    def __init__(self):
        self._users_by_id: Dict[int, User] = {}
        self._ids_by_email: Dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, name: str, email: str, password_hash: str) -> User:
        key = normalize_email(email)
        with self._lock:
            if key in self._ids_by_email:
                raise DuplicateEmailError(key)
            user = User(id=next(self._ids), name=name, email=key, password_hash=password_hash)
            self._users_by_id[user.id] = user
            self._ids_by_email[key] = user.id
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._ids_by_email.get(normalize_email(email))
        if user_id is None:
            return None
        return self._users_by_id.get(user_id)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users_by_id.get(user_id)

    def count(self) -> int:
        return len(self._users_by_id)


class OracleUserRepository:
    """
    User store on top of the ``USERS`` table.

    The table's unique constraint on ``EMAIL`` is the source of truth for
    uniqueness; its ``IntegrityError`` becomes ``DuplicateEmailError``.
    """

    def __init__(self, adb_client: OracleADBClient, sql_loader: Optional[SqlQueryLoader] = None):
        self.adb_client = adb_client
        self.sql_loader = sql_loader or SqlQueryLoader()

    @staticmethod
    def _row_to_user(df) -> Optional[User]:
        if df.empty:
            return None
        row = df.to_dict(orient="records")[0]
        return User(
            id=int(row["ID"]),
            name=row["NAME"],
            email=row["EMAIL"],
            password_hash=row["PASSWORD_HASH"],
        )

    def create(self, name: str, email: str, password_hash: str) -> User:
        key = normalize_email(email)
        next_id = self.sql_loader.next_user_id()
        id_df = self.adb_client.execute_query_df(next_id["query"], next_id["params"])
        user_id = int(id_df["ID"].iloc[0])

        insert = self.sql_loader.insert_user(user_id, name, key, password_hash)
        try:
            self.adb_client.execute_single_non_query(insert["query"], insert["params"])
        except oracledb.IntegrityError as e:
            raise DuplicateEmailError(key) from e
        return User(id=user_id, name=name, email=key, password_hash=password_hash)

    def get_by_email(self, email: str) -> Optional[User]:
        select = self.sql_loader.user_by_email(normalize_email(email))
        return self._row_to_user(self.adb_client.execute_query_df(select["query"], select["params"]))

    def get_by_id(self, user_id: int) -> Optional[User]:
        select = self.sql_loader.user_by_id(user_id)
        return self._row_to_user(self.adb_client.execute_query_df(select["query"], select["params"]))
