"""Cancellation handle returned by every listen/observe call."""

from __future__ import annotations

from typing import Callable


class Subscription:
    """Detaches a listener when cancelled.

    Cancelling is idempotent: the detach callback runs at most once.
    The handle is also callable, so ``unsubscribe()`` reads naturally.
    """

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Callable[[], None] | None = detach

    @property
    def active(self) -> bool:
        return self._detach is not None

    def cancel(self) -> None:
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()

    def __call__(self) -> None:
        self.cancel()
