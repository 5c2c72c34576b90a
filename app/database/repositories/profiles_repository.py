from app.auth.principal import Principal
from app.database.connection import get_connection


class ProfilesRepository:
    """Database operations for the profiles table."""

    def exists(self, user_id: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM profiles WHERE id = %s", (user_id,))
                return cur.fetchone() is not None

    def create(self, principal: Principal) -> None:
        """Insert the principal's profile; a concurrent insert is not an error."""
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO profiles (id, email, full_name)
                VALUES (%s, %s, %s)
                ON CONFLICT (id) DO NOTHING
                """,
                (principal.id, principal.email, principal.name or None),
            )
            conn.commit()
