"""Application tests for the session registry."""

import pytest
from identity.session.manager import SessionState
from storefront.registry import SessionRegistry, get_registry, reset_registry, set_registry


@pytest.fixture()
def registry(catalogue_store, credentials, channel):
    return SessionRegistry(catalogue_store=catalogue_store, credentials=credentials, channel=channel)


class TestSessionRegistry:
    def test_open_without_id_starts_a_session(self, registry):
        session = registry.open()
        assert session.session_id
        assert session.identity.state == SessionState.UNRESOLVED

    def test_open_with_known_id_returns_the_live_session(self, registry):
        session = registry.open()
        assert registry.open(session.session_id) is session

    def test_unknown_id_gets_a_fresh_session(self, registry):
        session = registry.open("forged-cookie")
        assert session.session_id != "forged-cookie"

    def test_sessions_are_independent(self, registry):
        first = registry.open()
        second = registry.open()
        first.identity.submit_buyer("Ana", "Jl. Mawar 1")
        assert second.identity.state == SessionState.UNRESOLVED

    def test_reload_restores_identity_but_not_cart(self, registry):
        session = registry.open()
        session.identity.submit_buyer("Ana", "Jl. Mawar 1")
        session.add_to_cart("p1", 2)

        reloaded = registry.reload(session.session_id)

        assert reloaded is not session
        assert reloaded.identity.identity.name == "Ana"
        assert reloaded.ledger.is_empty()

    def test_end_discards_session_and_storage(self, registry):
        session = registry.open()
        session.identity.submit_buyer("Ana", "Jl. Mawar 1")
        registry.end(session.session_id)

        assert registry.open(session.session_id).session_id != session.session_id


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSessionExpiry:
    @pytest.fixture()
    def clock(self):
        return _Clock()

    @pytest.fixture()
    def registry(self, catalogue_store, credentials, channel, clock):
        return SessionRegistry(
            catalogue_store=catalogue_store,
            credentials=credentials,
            channel=channel,
            idle_timeout=60,
            max_sessions=3,
            clock=clock,
        )

    def test_idle_session_is_dropped(self, registry, clock):
        session = registry.open()
        session.identity.submit_buyer("Ana", "Jl. Mawar 1")

        clock.now = 61
        reopened = registry.open(session.session_id)

        assert reopened.session_id != session.session_id
        assert reopened.identity.state == SessionState.UNRESOLVED
        assert len(registry) == 1

    def test_activity_keeps_a_session_alive(self, registry, clock):
        session = registry.open()
        for now in (30, 60, 90):
            clock.now = now
            assert registry.open(session.session_id) is session

    def test_cookieless_requests_do_not_accumulate(self, registry, clock):
        for now in range(50):
            clock.now = now * 10
            registry.open()
        assert len(registry) <= 3

    def test_least_recently_used_session_is_evicted_at_capacity(self, registry, clock):
        first = registry.open()
        clock.now = 1
        second = registry.open()
        clock.now = 2
        third = registry.open()
        clock.now = 3
        registry.open(first.session_id)

        clock.now = 4
        registry.open()

        assert len(registry) == 3
        assert registry.open(first.session_id) is first
        assert registry.open(third.session_id) is third
        assert registry.open(second.session_id).session_id != second.session_id


class TestRegistryFactory:
    def test_override_and_reset(self, registry):
        set_registry(registry)
        try:
            assert get_registry() is registry
        finally:
            reset_registry()
