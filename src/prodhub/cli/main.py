"""Productivity Hub CLI — run the server, mint a secret, talk to the API.

Usage:
    prodhub gen-secret                          # Print a fresh PRODHUB_JWT_SECRET
    prodhub serve                               # Run the API with uvicorn
    prodhub register alice alice@example.com    # Create an account, print token
    prodhub login alice@example.com             # Print a bearer token
    prodhub tasks -s todo                       # List your tasks (needs PRODHUB_TOKEN)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import secrets
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:5000"
SECRET_BYTES = 48


def _api_url() -> str:
    return os.environ.get("PRODHUB_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Productivity Hub backend."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _token_from_env() -> str:
    token = os.environ.get("PRODHUB_TOKEN")
    if not token:
        click.secho(
            "Error: PRODHUB_TOKEN not set (get one with `prodhub login`)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return token


def _data(r: httpx.Response):
    """Unwrap the success envelope, or print the API's error and exit."""
    try:
        body = r.json()
    except ValueError:
        body = {}
    if r.is_error or not body.get("success", False):
        error = body.get("error") or f"HTTP {r.status_code}"
        click.secho(f"Error: {error}", fg="red", err=True)
        sys.exit(1)
    return body.get("data")


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k) or "—")[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


def _status_color(status: str) -> str:
    colors = {
        "todo": "white",
        "in-progress": "yellow",
        "completed": "green",
    }
    return colors.get(status, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="prodhub")
def main():
    """Productivity Hub — API server and command-line client."""


@main.command("gen-secret")
def gen_secret():
    """Print a random value suitable for PRODHUB_JWT_SECRET."""
    click.echo(secrets.token_urlsafe(SECRET_BYTES))


@main.command()
@click.option("--host", default=None, help="Bind address (default: PRODHUB_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: PRODHUB_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    # Settings validate the signing secret, so load them only when serving
    from prodhub.config import settings

    uvicorn.run(
        "prodhub.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@main.command()
@click.argument("username")
@click.argument("email")
@click.password_option()
def register(username: str, email: str, password: str):
    """Create an account and print its token."""
    _run(_register_impl(username, email, password))


async def _register_impl(username: str, email: str, password: str):
    async with _client() as c:
        r = await c.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        data = _data(r)
    click.secho(f"Registered {data['user']['username']}", fg="green", err=True)
    click.echo(data["token"])


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in and print a bearer token (export it as PRODHUB_TOKEN)."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/api/auth/login", json={"email": email, "password": password})
        data = _data(r)
    click.echo(data["token"])


# ---------------------------------------------------------------------------
# prodhub tasks
# ---------------------------------------------------------------------------


@main.command()
@click.option("--status", "-s", "status_filter", help="Filter by status")
@click.option("--priority", "-p", help="Filter by priority")
def tasks(status_filter: Optional[str], priority: Optional[str]):
    """List your tasks."""
    _run(_tasks_impl(status_filter, priority))


async def _tasks_impl(status_filter: Optional[str], priority: Optional[str]):
    token = _token_from_env()

    async with _client(token) as c:
        params: dict = {}
        if status_filter:
            params["status"] = status_filter
        if priority:
            params["priority"] = priority

        r = await c.get("/api/tasks", params=params)
        tasks = _data(r)

    if not tasks:
        click.echo("No tasks found.")
        return

    click.secho(f"Tasks ({len(tasks)}):", bold=True)
    click.echo()
    for t in tasks:
        t["status"] = click.style(t["status"], fg=_status_color(t["status"]))
    _print_table(tasks, [
        ("ID", "id", 8),
        ("Status", "status", 24),
        ("Priority", "priority", 10),
        ("Deadline", "deadline", 20),
        ("Title", "title", 50),
    ])


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
