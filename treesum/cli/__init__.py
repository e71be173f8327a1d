"""
treesum CLI.

Command-line interface for generating checksum manifests.
"""

import logging

import click

from treesum import __version__
from treesum.config import DEFAULT_OUTPUT, DEFAULT_ROOT_DIR, ENV_PREFIX

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--dir",
    "root_dir",
    envvar=f"{ENV_PREFIX}_DIR",
    help=f"Root directory to calculate checksums (default: {DEFAULT_ROOT_DIR})",
)
@click.option(
    "--output",
    "-o",
    envvar=f"{ENV_PREFIX}_OUTPUT",
    help=f"Output file to save checksums, relative to the root (default: {DEFAULT_OUTPUT})",
)
@click.option(
    "--ignore",
    envvar=f"{ENV_PREFIX}_IGNORE",
    help="Comma-separated list of paths to ignore (relative to root)",
)
@click.option("--config", "-c", "config_path", help="Path to YAML config file")
@click.option("--verbose", "-v", is_flag=True, help="Log every file as it is hashed")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def main(
    root_dir: str | None,
    output: str | None,
    ignore: str | None,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Calculate checksums for every file under a directory."""
    from treesum.config import ManifestConfig, load_config_file
    from treesum.core.manifest.builder import generate_manifest
    from treesum.errors import TreesumError

    _configure_logging(verbose, quiet)

    try:
        file_config = load_config_file(config_path) if config_path else None
        config = ManifestConfig.from_sources(
            file_config,
            root_dir=root_dir,
            output=output,
            ignore=ignore,
        )
        manifest, output_path = generate_manifest(config)
    except TreesumError as e:
        click.echo(f"Error {e.operation}: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Wrote {len(manifest)} checksums to {output_path}")


if __name__ == "__main__":
    main()
