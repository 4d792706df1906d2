# SPDX-License-Identifier: MIT
"""CLI entry point for the drupal-make command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import MakeConfig
from .errors import MakeError


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def resolve(self, path: Path) -> Path:
        """Resolve a path relative to the project directory."""
        if path.is_absolute() or self.project_dir is None:
            return path
        return self.project_dir / path

    def load_config(self, config_path: Optional[Path], composer: dict) -> MakeConfig:
        """Load settings from a TOML file if given, else from composer.json."""
        if config_path is not None:
            return MakeConfig.from_toml(self.resolve(config_path))
        return MakeConfig.from_composer_dict(composer)


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


@click.group()
@click.version_option(package_name="drupal-make")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Change to directory before running command.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Generate drupal.org make files from Composer lock data.

    \b
    Examples:
        drupal-make generate
        drupal-make generate --dry-run
        drupal-make show
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("drupal_make").setLevel(logging.DEBUG if verbose else logging.INFO)


# Import and register commands
from .commands import generate, show

cli.add_command(generate.generate)
cli.add_command(show.show)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except MakeError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
