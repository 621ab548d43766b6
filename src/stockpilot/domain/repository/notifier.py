"""Abstract fire-and-forget notification surface (toasts, alerts)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    destructive: bool = False


class Notifier(ABC):

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        """Show a notice to the user."""
