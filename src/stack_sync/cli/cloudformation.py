"""
Stack synchronization CLI commands.

Every option can also be supplied through the GitHub Actions input
environment (INPUT_SOURCE-STACK-NAME or INPUT_SOURCE_STACK_NAME, ...).
"""

import sys
from typing import List, Optional

import click

from ..cloudformation import StackManager
from ..config import load_request, show_stack_trace
from ..sync import sync_stacks


def action_input(name: str) -> List[str]:
    """Environment variables GitHub Actions may use for an input."""
    upper = name.upper()
    return [f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"]


def annotate_error(message: str) -> str:
    """Format a message as a GitHub Actions error workflow command."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"::error::{escaped}"


def fail(error: Exception) -> None:
    """Report a failed run once, then exit or re-raise for diagnostics."""
    click.echo(annotate_error(str(error)))
    if show_stack_trace():
        raise error
    sys.exit(1)


@click.command()
@click.option(
    "--source-stack-name",
    envvar=action_input("source-stack-name"),
    help="Stack to copy the template and parameters from",
)
@click.option(
    "--target-stack-name",
    envvar=action_input("target-stack-name"),
    help="Stack to create or update",
)
@click.option(
    "--parameter-overrides",
    envvar=action_input("parameter-overrides"),
    help='JSON object of parameter overrides, e.g. \'{"Env": "prod"}\'',
)
@click.option(
    "--ignore-source-stack-status",
    envvar=action_input("ignore-source-stack-status"),
    help="Use the source stack whatever its status (true/false)",
)
@click.option(
    "--role-arn",
    envvar=action_input("role-arn"),
    help="IAM role CloudFormation assumes to provision the target",
)
@click.option(
    "--max-poll-attempts",
    envvar=action_input("max-poll-attempts"),
    help="Give up after this many status checks (default: wait forever)",
)
@click.option("--config-file", "-c", type=click.Path(), help="YAML file of inputs")
@click.option("--region", envvar=action_input("region"), help="AWS region")
@click.option("--profile", help="AWS profile to use")
def sync(
    source_stack_name: Optional[str],
    target_stack_name: Optional[str],
    parameter_overrides: Optional[str],
    ignore_source_stack_status: Optional[str],
    role_arn: Optional[str],
    max_poll_attempts: Optional[str],
    config_file: Optional[str],
    region: Optional[str],
    profile: Optional[str],
) -> None:
    """Create or update the target stack from the source stack."""
    try:
        request = load_request(
            {
                "source-stack-name": source_stack_name,
                "target-stack-name": target_stack_name,
                "parameter-overrides": parameter_overrides,
                "ignore-source-stack-status": ignore_source_stack_status,
                "role-arn": role_arn,
                "max-poll-attempts": max_poll_attempts,
                "region": region,
                "profile": profile,
            },
            config_file=config_file,
        )

        stack = sync_stacks(request)
        click.echo(
            f"✅ Target stack {stack.name} updated successfully in state "
            f"{stack.status.value}"
        )

    except Exception as e:
        fail(e)


@click.command()
@click.option("--stack-name", "-s", required=True, help="CloudFormation stack name")
@click.option("--region", help="AWS region")
@click.option("--profile", help="AWS profile to use")
def status(stack_name: str, region: Optional[str], profile: Optional[str]) -> None:
    """Show a stack's status and whether it can be synced from or onto."""
    try:
        manager = StackManager(region=region, profile=profile)
        stack = manager.read_stack(stack_name)

        if stack is None:
            click.echo(f"Stack {stack_name} does not exist")
            return

        click.echo(f"Stack: {stack.name}")
        click.echo(f"Status: {stack.status.value}")
        click.echo(f"Ready: {'yes' if stack.status.is_ready else 'no'}")
        if stack.parameters:
            click.echo("\nParameters:")
            for key, value in stack.parameters:
                click.echo(f"  {key}: {value}")

    except Exception as e:
        fail(e)
