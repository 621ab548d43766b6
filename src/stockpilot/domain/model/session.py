"""Session state: who is signed in, as an observable value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from stockpilot.domain.model.subscription import Subscription


@dataclass(frozen=True)
class Principal:
    """The authenticated identity handed over by the identity provider."""

    uid: str
    email: str
    display_name: str = ""
    photo_url: str | None = None

    @property
    def email_domain(self) -> str | None:
        _, at, domain = (self.email or "").rpartition("@")
        if not at or not domain:
            return None
        return domain.lower()


SessionListener = Callable[[Principal | None], None]


class SessionState:
    """Single-writer, multi-reader cell holding the current principal.

    Reads are synchronous. ``is_loading`` stays True until the first
    ``publish``; publishing the principal already held afterwards is a
    no-op. New subscribers get the current principal replayed once the
    session is resolved.
    """

    def __init__(self) -> None:
        self._principal: Principal | None = None
        self._resolved = False
        self._listeners: list[SessionListener] = []

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_loading(self) -> bool:
        return not self._resolved

    def publish(self, principal: Principal | None) -> None:
        if self._resolved and principal == self._principal:
            return
        self._principal = principal
        self._resolved = True
        for listener in list(self._listeners):
            listener(principal)

    def subscribe(self, listener: SessionListener) -> Subscription:
        self._listeners.append(listener)
        if self._resolved:
            listener(self._principal)
        return Subscription(lambda: self._listeners.remove(listener))
