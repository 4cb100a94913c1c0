"""Click CLI for signing and checking GitHub webhook payloads."""

from __future__ import annotations

from typing import BinaryIO

import click

from hubhook.webhook.signature import SignatureError, sign_payload, verify_signature


@click.group()
@click.option(
    "--secret",
    envvar="GITHUB_WEBHOOK_SECRET",
    required=True,
    help="Webhook secret (defaults to $GITHUB_WEBHOOK_SECRET).",
)
@click.pass_context
def cli(ctx: click.Context, secret: str) -> None:
    """GitHub webhook signature tools."""
    ctx.ensure_object(dict)
    ctx.obj["secret"] = secret


@cli.command()
@click.argument("payload", type=click.File("rb"), default="-")
@click.pass_context
def sign(ctx: click.Context, payload: BinaryIO) -> None:
    """Print the X-Hub-Signature value for a payload file (stdin by default)."""
    click.echo(sign_payload(ctx.obj["secret"], payload.read()))


@cli.command()
@click.argument("payload", type=click.File("rb"), default="-")
@click.option("--signature", required=True, help="X-Hub-Signature header value.")
@click.pass_context
def verify(ctx: click.Context, payload: BinaryIO, signature: str) -> None:
    """Check an X-Hub-Signature value against a payload file."""
    try:
        verify_signature(ctx.obj["secret"], payload.read(), signature)
    except SignatureError as exc:
        click.echo(f"invalid signature: {exc.reason}", err=True)
        ctx.exit(1)
    click.echo("ok")
