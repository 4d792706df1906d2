# SPDX-License-Identifier: MIT
"""Generate the drupal.org make files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..assembler import assemble
from ..encoder import encode, write_manifests
from ..errors import MakeError
from ..lockfile import direct_requirements, load_composer, load_lock
from ..main import Context, echo_error, echo_info, echo_success, pass_context


@click.command()
@click.option(
    "--lock",
    "lock_path",
    type=click.Path(path_type=Path),
    default="composer.lock",
    help="Composer lock file to convert.",
)
@click.option(
    "--composer",
    "composer_path",
    type=click.Path(path_type=Path),
    default="composer.json",
    help="Root composer.json declaring the direct requirements.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Directory the make files are written to.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="TOML file with a [drupal-make] table (overrides composer.json extra).",
)
@click.option(
    "--dev/--no-dev",
    default=None,
    help="Also convert packages-dev lock entries.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the make files instead of writing them.",
)
@pass_context
def generate(
    ctx: Context,
    lock_path: Path,
    composer_path: Path,
    output_dir: Path,
    config_path: Optional[Path],
    dev: Optional[bool],
    dry_run: bool,
) -> None:
    """Convert composer.lock into drupal-org.make and drupal-org-core.make.

    \b
    Examples:
        drupal-make generate                 # Write make files to the current directory
        drupal-make generate -o build        # Write make files to ./build
        drupal-make generate --dry-run       # Print the make files
    """
    try:
        composer = load_composer(ctx.resolve(composer_path))
        config = ctx.load_config(config_path, composer)
        include_dev = config.include_dev if dev is None else dev
        packages = load_lock(ctx.resolve(lock_path), include_dev=include_dev)
        core, main = assemble(packages, direct_requirements(composer), config)
    except (MakeError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    if ctx.verbose:
        echo_info(f"Projects: {len(main.projects)}, libraries: {len(main.libraries)}")

    if dry_run:
        for manifest, filename in ((core, config.core_make_file), (main, config.make_file)):
            if manifest is None:
                continue
            echo_info(f"; {filename}")
            echo_info(encode(manifest.to_dict()))
        return

    written = write_manifests(core, main, ctx.resolve(output_dir), config)
    for path in written:
        echo_success(f"Created: {path}")
