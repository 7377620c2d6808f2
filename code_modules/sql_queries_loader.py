"""
Sql Query Loader for the RealEstateConnect credential and session stores.

Every method returns a dict holding the statement under ``query`` and its
bind variables under ``params``. Values are never interpolated into the SQL
text.
"""
from datetime import datetime


class SqlQueryLoader:
    """
    Loads SQL Queries
    """
    @staticmethod
    def next_user_id():
        """
        Fetch the next value of the user id sequence.
        """
        return {
            "query": "SELECT USERS_SEQ.NEXTVAL AS ID FROM DUAL",
            "params": None,
        }

    @staticmethod
    def insert_user(user_id: int, name: str, email: str, password_hash: str):
        return {
            "query": """
                INSERT INTO USERS
                    (ID, NAME, EMAIL, PASSWORD_HASH)
                VALUES
                    (:user_id, :name, :email, :password_hash)
            """,
            "params": {
                "user_id": user_id,
                "name": name,
                "email": email,
                "password_hash": password_hash,
            },
        }

    @staticmethod
    def user_by_email(email: str):
        return {
            "query": "SELECT ID, NAME, EMAIL, PASSWORD_HASH FROM USERS WHERE EMAIL = :email",
            "params": {"email": email},
        }

    @staticmethod
    def user_by_id(user_id: int):
        return {
            "query": "SELECT ID, NAME, EMAIL, PASSWORD_HASH FROM USERS WHERE ID = :user_id",
            "params": {"user_id": user_id},
        }

    @staticmethod
    def insert_session(
        session_id: str,
        user_id: int,
        csrf_token: str,
        created_at: datetime,
        expires_at: datetime,
    ):
        """
        Timestamps are stored as naive UTC.
        """
        return {
            "query": """
                INSERT INTO SESSIONS
                    (SESSION_ID, USER_ID, CSRF_TOKEN, CREATED_AT, EXPIRES_AT)
                VALUES
                    (:session_id, :user_id, :csrf_token, :created_at, :expires_at)
            """,
            "params": {
                "session_id": session_id,
                "user_id": user_id,
                "csrf_token": csrf_token,
                "created_at": created_at.replace(tzinfo=None),
                "expires_at": expires_at.replace(tzinfo=None),
            },
        }

    @staticmethod
    def session_by_id(session_id: str):
        return {
            "query": """
                SELECT SESSION_ID, USER_ID, CSRF_TOKEN, CREATED_AT, EXPIRES_AT
                FROM SESSIONS WHERE SESSION_ID = :session_id
            """,
            "params": {"session_id": session_id},
        }

    @staticmethod
    def delete_session(session_id: str):
        return {
            "query": "DELETE FROM SESSIONS WHERE SESSION_ID = :session_id",
            "params": {"session_id": session_id},
        }
