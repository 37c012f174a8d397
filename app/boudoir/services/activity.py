import logging
from dataclasses import dataclass
from datetime import datetime

from app.boudoir.db.models import UserActivity
from app.boudoir.repos.activity import ActivityRepository

logger = logging.getLogger(__name__)


@dataclass
class ActivityEvent:
    user_id: object
    action: str
    entity_type: str | None = None
    entity_id: str | None = None
    metadata: dict | None = None
    trace_id: str | None = None


class ActivityService:
    """Best-effort user activity trail.

    Strategy: failures are logged and swallowed to avoid breaking request flows.
    """

    def __init__(self, db):
        self.repo = ActivityRepository(db)

    def record(self, event: ActivityEvent) -> None:
        metadata = dict(event.metadata or {})
        if event.trace_id:
            metadata.setdefault("trace_id", event.trace_id)
        try:
            self.repo.create(
                UserActivity(
                    user_id=event.user_id,
                    action=event.action,
                    entity_type=event.entity_type,
                    entity_id=str(event.entity_id) if event.entity_id is not None else None,
                    activity_metadata=metadata or None,
                    created_at=datetime.utcnow(),
                )
            )
        except Exception:
            logger.exception(
                "Failed to write user activity",
                extra={"action": event.action, "trace_id": event.trace_id, "entity_id": event.entity_id},
            )
