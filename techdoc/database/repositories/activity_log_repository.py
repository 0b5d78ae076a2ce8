from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from techdoc.database.connection import get_connection
from techdoc.database.models import ActivityLogRecord


class ActivityLogRepository:
    """Database operations for the activity_logs table."""

    def insert(
        self,
        *,
        user_id: str,
        action_type: str,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        document_id: str | None = None,
    ) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO activity_logs
                (user_id, document_id, action_type, details, ip_address, user_agent)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    user_id,
                    document_id,
                    action_type,
                    Jsonb(details) if details is not None else None,
                    ip_address,
                    user_agent,
                ),
            )
            conn.commit()

    def list_by_user(self, user_id: str, limit: int = 100) -> list[ActivityLogRecord]:
        """Most recent entries for a user. Test helper for the integration suite."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, document_id, action_type, details,
                           ip_address, user_agent, created_at
                    FROM activity_logs
                    WHERE user_id = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT %s
                    """,
                    (user_id, limit),
                )
                rows = cur.fetchall()

        return [
            ActivityLogRecord(
                id=row["id"],
                user_id=row["user_id"],
                document_id=row["document_id"],
                action_type=row["action_type"],
                details=row["details"],
                ip_address=row["ip_address"],
                user_agent=row["user_agent"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
