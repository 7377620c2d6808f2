"""
bcrypt password hashing.
"""
import bcrypt

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    Salted one-way hashing of user passwords.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = None

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Return True when ``password`` matches ``password_hash``.

        Over-long or malformed inputs simply do not match.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    def burn(self, password: str) -> None:
        """
        Spend one verification against a throwaway hash.

        Used for unknown logins so they take as long as a wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy-password")
        self.verify(password, self._dummy_hash)
