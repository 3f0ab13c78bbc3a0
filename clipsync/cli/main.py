"""clipsync CLI - seal and open clipboard envelopes from the terminal."""

from typing import NoReturn, Optional

import typer
from rich.console import Console

from .. import __version__
from ..config.settings import get_config
from ..utils.logging import get_logger, setup_logging
from ..vault.commands import (
    CommandError,
    clear_secret,
    decrypt_message,
    delete_saved_secret,
    encrypt_message,
    save_secret,
    set_secret,
    unlock_from_keyring,
)
from ..vault.envelope import Envelope
from ..vault.exceptions import InvalidEncodingError

app = typer.Typer(
    name="clipsync",
    help="Passphrase-based envelope encryption for clipboard sync.",
    no_args_is_help=True,
)

keyring_app = typer.Typer(help="Manage the passphrase saved in the OS keyring.")
app.add_typer(keyring_app, name="keyring")

console = Console()
logger = get_logger(__name__)

PASSPHRASE_OPTION = typer.Option(
    None,
    "--passphrase", "-p",
    envvar="CLIPSYNC_PASSPHRASE",
    help="Passphrase (default: OS keyring, then prompt)",
)


@app.callback()
def configure_logging(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: CLIPSYNC_LOG_LEVEL or INFO)",
    ),
    plain_logs: bool = typer.Option(
        False,
        "--plain-logs",
        help="Log without Rich formatting (default: CLIPSYNC_PLAIN_LOGS)",
    ),
):
    """Passphrase-based envelope encryption for clipboard sync."""
    config = get_config()
    setup_logging(
        level=log_level or config.log_level,
        log_file=config.log_file,
        rich_output=config.rich_logging and not plain_logs,
    )


def _fail(error: CommandError) -> NoReturn:
    console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


def _forget() -> None:
    """Clear the session passphrase without masking the command result."""
    try:
        clear_secret()
    except CommandError as e:
        logger.warning(f"Could not clear session passphrase ({e.code})")


def _unlock(passphrase: Optional[str]) -> None:
    """Load the session passphrase from the option, the keyring, or a prompt."""
    try:
        if passphrase is None and unlock_from_keyring():
            return
    except CommandError as e:
        logger.warning(f"Keyring unavailable ({e.code}), prompting for passphrase")
    if passphrase is None:
        passphrase = typer.prompt("Passphrase", hide_input=True)
    set_secret(passphrase)


@app.command()
def encrypt(
    text: str = typer.Argument(..., help="Plaintext to encrypt"),
    passphrase: Optional[str] = PASSPHRASE_OPTION,
):
    """
    Encrypt text into an envelope.

    Prints the envelope as JSON: {"salt", "iv", "ciphertext"}.
    """
    try:
        _unlock(passphrase)
        envelope = encrypt_message(text)
    except CommandError as e:
        _fail(e)
    finally:
        _forget()

    typer.echo(Envelope.from_dict(envelope).to_json())


@app.command()
def decrypt(
    envelope_json: str = typer.Argument(..., help="Envelope JSON produced by 'encrypt'"),
    passphrase: Optional[str] = PASSPHRASE_OPTION,
):
    """
    Decrypt an envelope back to its plaintext.
    """
    try:
        envelope = Envelope.from_json(envelope_json)
    except InvalidEncodingError:
        _fail(CommandError("invalid_input"))

    try:
        _unlock(passphrase)
        plaintext = decrypt_message(envelope)
    except CommandError as e:
        _fail(e)
    finally:
        _forget()

    typer.echo(plaintext)


@keyring_app.command("save")
def keyring_save():
    """Save a passphrase in the OS keyring."""
    passphrase = typer.prompt("Passphrase", hide_input=True, confirmation_prompt=True)
    try:
        save_secret(passphrase)
    except CommandError as e:
        _fail(e)

    console.print("[green]✓ Passphrase saved to keyring[/green]")


@keyring_app.command("delete")
def keyring_delete():
    """Delete the passphrase saved in the OS keyring."""
    try:
        deleted = delete_saved_secret()
    except CommandError as e:
        _fail(e)

    if deleted:
        console.print("[green]✓ Passphrase removed from keyring[/green]")
    else:
        console.print("[yellow]No passphrase saved[/yellow]")


@app.command()
def version():
    """Show version information."""
    console.print(f"clipsync v{__version__}")
    console.print("Envelope encryption for clipboard sync")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
