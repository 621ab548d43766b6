"""CLI commands for signing in and out."""

from __future__ import annotations

import click

from stockpilot.infrastructure import bootstrap


@click.command("login")
def auth_login() -> None:
    """Sign in with your company email address."""
    gate = bootstrap.auth_gate()
    try:
        if gate.principal is not None:
            click.echo(f"Already signed in as {gate.principal.email}")
            return
        gate.sign_in()
        if gate.principal is None:
            raise click.ClickException("Not signed in.")
        click.echo(f"Signed in as {gate.principal.display_name} <{gate.principal.email}>")
    finally:
        gate.close()


@click.command("logout")
def auth_logout() -> None:
    """Sign out."""
    gate = bootstrap.auth_gate()
    try:
        gate.sign_out()
    finally:
        gate.close()
    click.echo("Signed out.")


@click.command("whoami")
def auth_whoami() -> None:
    """Show the signed-in user."""
    gate = bootstrap.auth_gate()
    try:
        principal = gate.principal
    finally:
        gate.close()

    if principal is None:
        click.echo("Not signed in.")
        return
    click.echo(f"{principal.display_name} <{principal.email}>")
