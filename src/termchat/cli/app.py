"""Main CLI application using Typer."""
import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..chat import ChatSession
from ..config import DEFAULT_CONFIG_PATH
from ..logging_setup import configure_logging
from .providers import get_gateway, require_config

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="termchat",
    help="Terminal chat client for OpenAI-compatible completion services",
    no_args_is_help=False,
    add_completion=True,
)

# Console for rich output
console = Console()

CONFIG_OPTION = typer.Option(
    DEFAULT_CONFIG_PATH,
    "--config",
    "-c",
    help="Path to the JSON config file with API_KEY",
)


@app.command()
def chat(
    config_path: Path = CONFIG_OPTION,
    inline: bool = typer.Option(
        False,
        "--inline",
        help="Render below the shell prompt instead of on the alternate screen"
    ),
):
    """Launch the interactive chat interface."""
    configure_logging()
    config = require_config(config_path, console)
    gateway = get_gateway(config, console)
    logger.info("Starting chat with %s (%s)", gateway.model_name, config.provider)

    async def _chat() -> str:
        from ..ui import run_chat_tui

        session = ChatSession(system_prompt=config.system_prompt)
        try:
            return await run_chat_tui(gateway, session=session, inline=inline)
        finally:
            try:
                await gateway.close()
            except RuntimeError as e:
                logger.debug("Ignoring error while closing provider: %s", e)

    try:
        buffer = asyncio.run(_chat())
    except KeyboardInterrupt:
        buffer = ""

    # Flush whatever was typed but not sent
    print(buffer)


@app.command(name="config")
def show_config(config_path: Path = CONFIG_OPTION):
    """Show the effective configuration (API key masked)."""
    config = require_config(config_path, console)

    key = config.api_key
    masked = f"{key[:3]}...{key[-4:]}" if len(key) > 10 else "****"

    table = Table(title="termchat configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Config file", str(config_path))
    table.add_row("Provider", config.provider)
    table.add_row("Model", config.model or "[dim]provider default[/dim]")
    table.add_row("Base URL", config.base_url or "[dim]provider default[/dim]")
    table.add_row("API key", masked)
    table.add_row("Temperature", f"{config.temperature:g}")
    timeout = f"{config.request_timeout:g}s" if config.request_timeout else "none"
    table.add_row("Request timeout", timeout)
    max_tokens = str(config.max_tokens) if config.max_tokens else "[dim]provider default[/dim]"
    table.add_row("Max tokens", max_tokens)
    table.add_row("System prompt", config.system_prompt or "[dim]none[/dim]")
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
