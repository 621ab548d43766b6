"""Notifier that prints notices to the terminal."""

from __future__ import annotations

import click

from stockpilot.domain.repository.notifier import Notice, Notifier


class ClickNotifier(Notifier):

    def notify(self, notice: Notice) -> None:
        click.secho(
            f"{notice.title}: {notice.description}",
            fg="red" if notice.destructive else "yellow",
            bold=notice.destructive,
            err=True,
        )
