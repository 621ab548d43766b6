"""Identity provider that signs users in at the terminal.

The session survives between CLI invocations in a small JSON file.
Registering a session observer immediately reports the persisted
session, the way hosted identity SDKs restore a previous login.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Callable

import click

from stockpilot.domain.exceptions import IdentityProviderError
from stockpilot.domain.model.session import Principal
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.identity_provider import IdentityProvider

logger = logging.getLogger(__name__)

SessionCallback = Callable[[Principal | None], None]


class LocalIdentityProvider(IdentityProvider):

    def __init__(
        self,
        session_file: Path,
        prompt: Callable[..., str] = click.prompt,
    ) -> None:
        self._session_file = session_file
        self._prompt = prompt
        self._callbacks: list[SessionCallback] = []

    # --- IdentityProvider interface -------------------------------------------

    def interactive_sign_in(self) -> Principal:
        try:
            email = self._prompt("Email").strip()
            default_name = email.partition("@")[0]
            display_name = self._prompt("Display name", default=default_name).strip()
        except click.Abort as exc:
            raise IdentityProviderError("Sign-in cancelled") from exc

        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise IdentityProviderError(f"Not a valid email address: {email!r}")

        principal = Principal(
            uid=uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.lower()}").hex,
            email=email,
            display_name=display_name,
        )
        self._write_session(principal)
        self._emit(principal)
        return principal

    def sign_out(self) -> None:
        try:
            self._session_file.unlink(missing_ok=True)
        except OSError as exc:
            raise IdentityProviderError(f"Cannot clear session: {exc}") from exc
        self._emit(None)

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        self._callbacks.append(callback)
        callback(self._read_session())
        return Subscription(lambda: self._callbacks.remove(callback))

    # --- Session file ---------------------------------------------------------

    def _read_session(self) -> Principal | None:
        if not self._session_file.exists():
            return None
        try:
            raw = json.loads(self._session_file.read_text(encoding="utf-8"))
            return Principal(
                uid=raw["uid"],
                email=raw["email"],
                display_name=raw.get("displayName", ""),
                photo_url=raw.get("photoUrl"),
            )
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable session file: %s", exc)
            return None

    def _write_session(self, principal: Principal) -> None:
        raw = {
            "uid": principal.uid,
            "email": principal.email,
            "displayName": principal.display_name,
            "photoUrl": principal.photo_url,
        }
        try:
            self._session_file.parent.mkdir(parents=True, exist_ok=True)
            self._session_file.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise IdentityProviderError(f"Cannot store session: {exc}") from exc

    def _emit(self, principal: Principal | None) -> None:
        for callback in list(self._callbacks):
            callback(principal)
