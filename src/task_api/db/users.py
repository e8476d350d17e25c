"""User persistence."""

from .client import Database


class UserStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    def create_user(self, user: dict) -> dict:
        """Insert a user. Raises DuplicateKeyError if the email is taken."""
        with self.db.connect() as conn:
            conn.execute(
                """
                INSERT INTO users (id, name, email, password_hash, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    user["id"],
                    user["name"],
                    user["email"],
                    user["password_hash"],
                    user["created_at"],
                    user["updated_at"],
                ),
            )
        return self.get_user_by_id(user["id"])

    def get_user_by_id(self, user_id: str) -> dict | None:
        with self.db.connect() as conn:
            cursor = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = cursor.fetchone()
            return dict(row) if row else None

    def get_user_by_email(self, email: str) -> dict | None:
        with self.db.connect() as conn:
            cursor = conn.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = cursor.fetchone()
            return dict(row) if row else None
