#!/usr/bin/env python3
"""
modelsetup CLI entry point.

Usage:
    modelsetup                                   # Pick a provider interactively
    modelsetup --auth-choice ollama-api          # Configure Ollama
    modelsetup --auth-choice ollama-api --base-url http://gpu-box:11434 --yes
    modelsetup --global                          # Write ~/.config/modelsetup/config.yaml
    modelsetup --dry-run                         # Print the result instead of saving
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import questionary
import yaml
from rich.console import Console

from modelsetup import __version__
from modelsetup.config import (
    ConfigError,
    default_config_file,
    get_config_paths,
    load_config,
    save_config,
)
from modelsetup.setup import (
    AUTH_CHOICES,
    AuthChoiceParams,
    ScriptedPrompter,
    SetupCancelled,
    TerminalPrompter,
    apply_auth_choice,
    list_auth_choices,
)
from modelsetup.setup import prompt_utils


console = Console()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="modelsetup",
        description="modelsetup - configure model providers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--auth-choice",
        type=str,
        metavar="CHOICE",
        help=f"Provider setup to run ({', '.join(AUTH_CHOICES)})",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        help="Configuration file to read and update",
    )

    parser.add_argument(
        "--global",
        dest="global_config",
        action="store_true",
        help="Write to ~/.config/modelsetup instead of ./.modelsetup",
    )

    # Non-interactive answers
    parser.add_argument(
        "--base-url",
        type=str,
        help="Base URL to use without prompting",
    )

    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Continue without prompting when the server is unreachable",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resulting configuration instead of saving it",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"modelsetup {__version__}",
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
    )
    if not verbose:
        for noisy_logger in ("httpx", "httpcore"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def resolve_config_file(args: argparse.Namespace) -> Path:
    """Pick the config file from --config, --global, or discovery."""
    if args.config:
        return Path(args.config).expanduser()
    if args.global_config:
        return default_config_file("global")

    discovered = get_config_paths().config_file
    return discovered if discovered is not None else default_config_file("local")


def select_auth_choice() -> Optional[str]:
    """Ask the user which provider to configure."""
    options = list_auth_choices()
    choices = [
        questionary.Choice(title=f"{option.label} - {option.hint}", value=option.value)
        for option in options
    ]
    return prompt_utils.q_select(
        "Select a provider:",
        choices,
        default=options[0].value if options else None,
        allow_cancel=True,
    )


def build_prompter(args: argparse.Namespace):
    """Scripted answers when --base-url/--yes are given, terminal otherwise."""
    if args.base_url is not None or args.yes:
        return ScriptedPrompter(
            text_answer=args.base_url,
            confirm_answer=args.yes,
            console=console,
        )
    return TerminalPrompter(console=console)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    config_file = resolve_config_file(args)
    try:
        config = load_config(config_file)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        auth_choice = args.auth_choice or select_auth_choice()
        if not auth_choice:
            return 1

        if auth_choice not in AUTH_CHOICES:
            console.print(f"[red]Error: Unknown auth choice '{auth_choice}'[/red]")
            console.print("\nAvailable choices:")
            for option in list_auth_choices():
                console.print(f"  - {option.value}")
            return 1

        params = AuthChoiceParams(
            auth_choice=auth_choice,
            config=config,
            prompter=build_prompter(args),
        )
        result = asyncio.run(apply_auth_choice(params))
    except SetupCancelled:
        console.print("\n[yellow]Setup cancelled.[/yellow]")
        return 1

    if result is None or result.config == config:
        console.print("[yellow]No changes made.[/yellow]")
        return 0

    if args.dry_run:
        console.print(
            yaml.safe_dump(result.config, default_flow_style=False, sort_keys=False, allow_unicode=True),
            markup=False,
            highlight=False,
        )
        return 0

    save_config(result.config, config_file)
    console.print(f"[green]Configuration saved to {config_file}[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
