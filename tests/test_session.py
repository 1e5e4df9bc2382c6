from datetime import timedelta

from storefront.core.config import settings
from storefront.core.session import SessionManager
from storefront.models.cart import CartAction
from storefront.models.checkout import CheckoutState

from .conftest import make_product


class TestSessionManager:
    def test_each_session_has_its_own_cart(self, client):
        manager = SessionManager()
        first = manager.create_session(client)
        second = manager.create_session(client)

        first.store.dispatch(CartAction.add(make_product("p1")))

        assert first.store.item_count == 1
        assert second.store.state.is_empty
        assert first.checkout.store is first.store

    def test_delete(self, client):
        manager = SessionManager()
        session = manager.create_session(client)

        assert manager.delete_session(session.session_id) is True
        assert manager.delete_session(session.session_id) is False
        assert manager.get_session(session.session_id) is None

    def test_cleanup_old_sessions(self, client):
        manager = SessionManager()
        stale = manager.create_session(client)
        fresh = manager.create_session(client)
        stale.updated_at -= timedelta(hours=25)

        assert manager.cleanup_old_sessions(max_age_hours=24) == 1
        assert manager.get_session(stale.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh

    def test_creating_a_session_drops_expired_ones(self, client, monkeypatch):
        monkeypatch.setattr(settings, "session_max_age_hours", 24)
        manager = SessionManager()
        stale = manager.create_session(client)
        stale.updated_at -= timedelta(hours=25)

        newest = manager.create_session(client)

        assert manager.get_session(stale.session_id) is None
        assert list(manager.sessions) == [newest.session_id]

    def test_session_mid_checkout_is_kept(self, client, monkeypatch):
        manager = SessionManager()
        busy = manager.create_session(client)
        busy.updated_at -= timedelta(hours=25)
        monkeypatch.setattr(busy.checkout, "_state", CheckoutState.SUBMITTING)

        assert manager.cleanup_old_sessions(max_age_hours=24) == 0
        assert manager.get_session(busy.session_id) is busy

    def test_touch_keeps_session_alive(self, client):
        manager = SessionManager()
        session = manager.create_session(client)
        session.updated_at -= timedelta(hours=25)

        session.touch()

        assert manager.cleanup_old_sessions(max_age_hours=24) == 0
