"""Domain service: Auth Gate.

Wraps the identity provider and only lets principals from allowlisted
email domains through. Every session change reported by the provider
is inspected:

  - allowlisted domain  -> the principal is published
  - other or no domain  -> an "Access Denied" notice is shown, the
                           provider session is ended, and ``None`` is
                           published
  - no session          -> ``None`` is published

Provider failures during sign-in/sign-out are logged, never raised:
the user simply stays signed out and may try again.
"""

from __future__ import annotations

import logging
from typing import Iterable

from stockpilot.domain.exceptions import IdentityProviderError
from stockpilot.domain.model.session import Principal, SessionListener, SessionState
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.identity_provider import IdentityProvider
from stockpilot.domain.repository.notifier import Notice, Notifier

logger = logging.getLogger(__name__)

ACCESS_DENIED = Notice(
    title="Access Denied",
    description="You do not have permission to access this application.",
    destructive=True,
)


class AuthGate:

    def __init__(
        self,
        provider: IdentityProvider,
        notifier: Notifier,
        allowed_domains: Iterable[str],
    ) -> None:
        self._provider = provider
        self._notifier = notifier
        self._allowed_domains = frozenset(d.strip().lower() for d in allowed_domains)
        self._state = SessionState()
        self._provider_subscription = provider.on_session_change(
            self._on_session_change
        )

    # --- Readers --------------------------------------------------------------

    @property
    def principal(self) -> Principal | None:
        return self._state.principal

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def subscribe(self, listener: SessionListener) -> Subscription:
        return self._state.subscribe(listener)

    def is_allowed(self, principal: Principal) -> bool:
        domain = principal.email_domain
        return domain is not None and domain in self._allowed_domains

    # --- Commands -------------------------------------------------------------

    def sign_in(self) -> None:
        try:
            self._provider.interactive_sign_in()
        except IdentityProviderError as exc:
            logger.error("Error signing in: %s", exc)

    def sign_out(self) -> None:
        try:
            self._provider.sign_out()
        except IdentityProviderError as exc:
            logger.error("Error signing out: %s", exc)

    def close(self) -> None:
        self._provider_subscription.cancel()

    # --- Provider observer ----------------------------------------------------

    def _on_session_change(self, principal: Principal | None) -> None:
        if principal is None:
            self._state.publish(None)
            return

        if self.is_allowed(principal):
            logger.info("Session accepted for %s", principal.email)
            self._state.publish(principal)
            return

        logger.warning("Rejected sign-in from %s", principal.email)
        self._notifier.notify(ACCESS_DENIED)
        self.sign_out()
        self._state.publish(None)
