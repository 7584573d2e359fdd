#!/usr/bin/env python3
"""Main CLI entry point for stack-sync."""

import logging

import click

from .cloudformation import status, sync


@click.group()
@click.version_option(package_name="stack-sync")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Synchronize CloudFormation stacks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


cli.add_command(sync)
cli.add_command(status)


if __name__ == "__main__":
    cli()
