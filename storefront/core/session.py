"""Per-shopper carts, keyed by session ID"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from dataclasses import dataclass, field

from ..models.checkout import CheckoutState
from ..services.cart_store import CartStore
from ..services.checkout_flow import CheckoutFlow, OrderSubmitter
from .config import settings

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserSession:
    """A cart store and the checkout flow bound to it"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    checkout: CheckoutFlow
    store: CartStore = field(default_factory=CartStore)

    def touch(self) -> None:
        self.updated_at = _now()

    def is_expired(self, now: datetime, max_age: timedelta) -> bool:
        # A session placing an order is kept until the flow is back to IDLE
        if self.checkout.state != CheckoutState.IDLE:
            return False
        return now - self.updated_at > max_age


class SessionManager:
    """
    In-memory session registry.

    Idle sessions expire after `settings.session_max_age_hours`; expired
    ones are swept whenever a new session is created.
    """

    def __init__(self):
        self.sessions: dict[str, UserSession] = {}

    def create_session(self, client: OrderSubmitter) -> UserSession:
        """Sweep expired sessions, then start one with an empty cart"""
        self.cleanup_old_sessions()

        now = _now()
        store = CartStore()
        session = UserSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            store=store,
            checkout=CheckoutFlow(
                store=store,
                client=client,
                success_delay=settings.checkout_success_delay,
            ),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[UserSession]:
        return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    def cleanup_old_sessions(self, max_age_hours: Optional[int] = None) -> int:
        """Drop idle sessions untouched for longer than max_age_hours"""
        if max_age_hours is None:
            max_age_hours = settings.session_max_age_hours
        now = _now()
        max_age = timedelta(hours=max_age_hours)

        expired = [
            sid for sid, session in self.sessions.items()
            if session.is_expired(now, max_age)
        ]
        for sid in expired:
            del self.sessions[sid]

        if expired:
            logger.info(f"Dropped {len(expired)} expired sessions")
        return len(expired)


session_manager = SessionManager()
