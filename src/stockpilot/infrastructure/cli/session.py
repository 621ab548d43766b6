"""Shared helpers for commands that need a signed-in session."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import click

from stockpilot.domain.exceptions import DomainException
from stockpilot.infrastructure import bootstrap
from stockpilot.infrastructure.bootstrap import Services


@contextmanager
def signed_in() -> Iterator[Services]:
    """Yield started services, refusing to run without an accepted session."""
    svc = bootstrap.services()
    try:
        try:
            svc.app.require_principal()
        except DomainException as exc:
            raise click.ClickException(f"{exc} Run 'stockpilot auth login'.")
        yield svc
    finally:
        svc.close()
