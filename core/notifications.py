# core/notifications.py

"""
Transient, self-expiring messages surfaced to the active session.

Fire-and-forget: a notification is only ever sent after the mutation it
describes has committed, and losing one never affects entity state.
"""

import uuid
from datetime import timedelta
from typing import List, Optional

from apscheduler.schedulers.base import BaseScheduler

from core.cache import ExpiringStore
from core.logging_config import logger
from core.scheduler import cancel_job, schedule_once
from models.notification import Notification

EXPIRY_JOB_PREFIX = "notification-expiry:"


class NotificationBroadcaster:

    def __init__(
        self,
        store: Optional[ExpiringStore] = None,
        scheduler: Optional[BaseScheduler] = None,
        ttl_seconds: float = 6,
    ):
        self.ttl_seconds = ttl_seconds
        self._store = store or ExpiringStore()
        self._scheduler = scheduler

    # -----------------------------------------------------
    # 📣 Broadcast
    # -----------------------------------------------------
    def broadcast(self, title: str, content: str, tab_target: Optional[str] = None) -> Notification:
        notification_id = uuid.uuid4().hex[:9]
        created_at = self._store.now()
        expires_at = created_at + timedelta(seconds=self.ttl_seconds)

        notification = Notification(
            id=notification_id,
            title=title,
            content=content,
            created_at=created_at,
            expires_at=expires_at,
            tab_target=tab_target,
        )
        self._store.set_until(notification_id, notification, expires_at)

        if self._scheduler is not None:
            schedule_once(
                self._scheduler,
                EXPIRY_JOB_PREFIX + notification_id,
                expires_at,
                self._expire,
                notification_id,
            )

        logger.info(f"Notification '{title}': {content}")
        return notification

    def _expire(self, notification_id: str):
        self._store.delete(notification_id)

    # -----------------------------------------------------
    # Reads / dismissal
    # -----------------------------------------------------
    def active(self) -> List[Notification]:
        """Live notifications, newest first."""
        return self._store.values()

    def get(self, notification_id: str) -> Optional[Notification]:
        return self._store.get(notification_id)

    def dismiss(self, notification_id: str) -> bool:
        if self._scheduler is not None:
            cancel_job(self._scheduler, EXPIRY_JOB_PREFIX + notification_id)
        return self._store.delete(notification_id)

    def clear(self):
        """Drop everything and cancel every pending expiry timer."""
        if self._scheduler is not None:
            for notification_id in self._store.keys():
                cancel_job(self._scheduler, EXPIRY_JOB_PREFIX + notification_id)
        self._store.clear()
