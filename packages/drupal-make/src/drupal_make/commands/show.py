# SPDX-License-Identifier: MIT
"""Show how each locked package is classified."""

from __future__ import annotations

from pathlib import Path

import click

from ..classifier import ManifestRole, classify
from ..errors import MakeError
from ..lockfile import direct_requirements, load_composer, load_lock
from ..main import Context, echo_error, echo_info, pass_context


@click.command()
@click.option(
    "--lock",
    "lock_path",
    type=click.Path(path_type=Path),
    default="composer.lock",
    help="Composer lock file to inspect.",
)
@click.option(
    "--composer",
    "composer_path",
    type=click.Path(path_type=Path),
    default="composer.json",
    help="Root composer.json declaring the direct requirements.",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Include ignored packages.",
)
@pass_context
def show(ctx: Context, lock_path: Path, composer_path: Path, show_all: bool) -> None:
    """List locked packages with their make file role."""
    try:
        composer = load_composer(ctx.resolve(composer_path))
        config = ctx.load_config(None, composer)
        packages = load_lock(ctx.resolve(lock_path), include_dev=config.include_dev)
        requirements = direct_requirements(composer)
    except (MakeError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    for package in packages:
        role = classify(package, requirements, config)
        if role is ManifestRole.IGNORED and not show_all:
            continue
        echo_info(f"{package.name:<40} {package.version:<20} {role.value}")
