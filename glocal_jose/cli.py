"""Command line interface for generating and sending JOSE tokens."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from glocal_jose.client import PaymentClient
from glocal_jose.config import load_config
from glocal_jose.errors import JoseTokenError
from glocal_jose.security.tokens import generate_tokens

app = typer.Typer(help="CLI for PayGlocal JWE/JWS token generation")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Python logging level"),
) -> None:
    """glocal-jose CLI entry point."""
    logging.basicConfig(level=log_level.upper())


def _read_payload(payload_file: Optional[Path]) -> Any:
    if payload_file is not None:
        text = payload_file.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()
    if not text.strip():
        text = "{}"
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        typer.secho(f"Payload is not valid JSON: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("generate")
def generate(
    payload_file: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="JSON payload file (stdin when omitted)",
    ),
    config: Optional[str] = typer.Option(None, help="Path to the settings YAML"),
) -> None:
    """
    Print the JWE for a payload and the JWS over that JWE.

    Key ids, merchant id and key paths come from the settings file and the
    PAYGLOCAL_* environment variables.

    Example:
        echo '{"amount": 100}' | glocal-jose generate
        glocal-jose generate payload.json --config settings.yaml
    """
    payload = _read_payload(payload_file)
    try:
        token_config = load_config(config).to_token_config()
        tokens = generate_tokens(payload, token_config)
    except JoseTokenError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(tokens.model_dump_json())


@app.command("initiate")
def initiate(
    payload_file: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="JSON payload file (stdin when omitted)",
    ),
    config: Optional[str] = typer.Option(None, help="Path to the settings YAML"),
    timeout: float = typer.Option(30.0, help="HTTP timeout in seconds"),
) -> None:
    """Generate tokens for a payload and send them to the initiation endpoint."""
    payload = _read_payload(payload_file)
    settings = load_config(config)
    client = PaymentClient(base_url=settings.api_base_url, timeout=timeout)
    try:
        response = client.initiate(payload, settings.to_token_config())
    except JoseTokenError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(response.body)


if __name__ == "__main__":
    app()
