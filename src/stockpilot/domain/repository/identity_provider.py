"""Abstract third-party identity provider."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from stockpilot.domain.model.session import Principal
from stockpilot.domain.model.subscription import Subscription


class IdentityProvider(ABC):

    @abstractmethod
    def interactive_sign_in(self) -> Principal:
        """Run the interactive sign-in flow.

        Raises IdentityProviderError on failure or cancellation.
        """

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session. Raises IdentityProviderError on failure."""

    @abstractmethod
    def on_session_change(
        self, callback: Callable[[Principal | None], None]
    ) -> Subscription:
        """Call ``callback`` with the current session, then on every change."""
