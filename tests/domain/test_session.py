"""Unit tests for the observable session cell and subscriptions."""

from stockpilot.domain.model.session import Principal, SessionState
from stockpilot.domain.model.subscription import Subscription

ALICE = Principal(uid="u1", email="alice@luckyfood.com")


class TestPrincipal:

    def test_email_domain(self):
        assert ALICE.email_domain == "luckyfood.com"

    def test_email_domain_uses_last_at(self):
        assert Principal(uid="x", email="a@b@Example.org").email_domain == "example.org"

    def test_no_domain(self):
        assert Principal(uid="x", email="nobody").email_domain is None
        assert Principal(uid="x", email="nobody@").email_domain is None


class TestSessionState:

    def test_starts_loading(self):
        state = SessionState()
        assert state.is_loading is True
        assert state.principal is None

    def test_publish_resolves(self):
        state = SessionState()
        state.publish(None)
        assert state.is_loading is False

    def test_subscribe_replays_once_resolved(self):
        state = SessionState()
        state.publish(ALICE)
        seen = []
        state.subscribe(seen.append)
        assert seen == [ALICE]

    def test_subscribe_before_resolution_does_not_replay(self):
        state = SessionState()
        seen = []
        state.subscribe(seen.append)
        assert seen == []
        state.publish(None)
        assert seen == [None]

    def test_unchanged_principal_not_republished(self):
        state = SessionState()
        seen = []
        state.subscribe(seen.append)
        state.publish(ALICE)
        state.publish(ALICE)
        assert seen == [ALICE]

    def test_cancelled_listener_not_called(self):
        state = SessionState()
        seen = []
        sub = state.subscribe(seen.append)
        sub.cancel()
        state.publish(ALICE)
        assert seen == []


class TestSubscription:

    def test_cancel_is_idempotent(self):
        calls = []
        sub = Subscription(lambda: calls.append(1))
        sub()
        sub.cancel()
        assert calls == [1]
        assert sub.active is False
