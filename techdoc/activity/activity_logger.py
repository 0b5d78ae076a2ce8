from typing import Any

from techdoc.database.repositories.activity_log_repository import ActivityLogRepository
from techdoc.logging.logger import Log


class ActivityLogger:
    """Fire-and-forget audit trail. A logging failure never fails the caller."""

    def __init__(self, repo: ActivityLogRepository) -> None:
        self._repo = repo

    def log_activity(
        self,
        user_id: str,
        action_type: str,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        document_id: str | None = None,
    ) -> None:
        try:
            self._repo.insert(
                user_id=user_id,
                action_type=action_type,
                details=details,
                ip_address=ip_address,
                user_agent=user_agent,
                document_id=document_id,
            )
        except Exception as exc:
            Log.error(
                f"Failed to log activity '{action_type}' for user {user_id}: {exc}"
            )
