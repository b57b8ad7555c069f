"""Provider factory functions for CLI.

Centralizes creation of the completion gateway from the client config.
Hides configuration details from command implementations.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..chat import CompletionGateway, ResponseChannel
from ..config import ClientConfig, load_config
from ..exceptions import ConfigError, ProviderError
from ..llm import create_llm_provider

# Default console for output
_console = Console()


def require_config(path: Path, console: Console | None = None) -> ClientConfig:
    """Load the configuration file, exiting if it is unusable.

    Args:
        path: Path to the JSON configuration file
        console: Optional Rich console for output

    Returns:
        Validated client configuration

    Raises:
        typer.Exit: If the file is missing or malformed
    """
    con = console or _console
    try:
        return load_config(path)
    except ConfigError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_gateway(config: ClientConfig, console: Console | None = None) -> CompletionGateway:
    """Create the completion gateway for a configuration.

    Args:
        config: Client configuration
        console: Optional Rich console for output

    Returns:
        Gateway with a fresh response channel

    Raises:
        typer.Exit: If the provider is not supported
    """
    con = console or _console
    try:
        provider = create_llm_provider(config.provider, **config.provider_options())
    except ProviderError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    return CompletionGateway(
        provider=provider,
        channel=ResponseChannel(),
        model=config.model,
        temperature=config.temperature,
        timeout=config.request_timeout,
        max_tokens=config.max_tokens,
    )
