"""
Configuration for a stack synchronization run.

A SyncRequest is assembled once from CLI options, GitHub Actions inputs and
an optional YAML file, then passed explicitly to every stage.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .errors import ConfigurationError, InvalidOverrides

DEFAULT_POLL_INTERVAL = 15

OVERRIDES_SCHEMA = {
    "type": "object",
    "additionalProperties": {"type": ["string", "number", "boolean"]},
}

REQUIRED_INPUTS = ("source-stack-name", "target-stack-name", "parameter-overrides")


@dataclass(frozen=True)
class SyncRequest:
    """Everything needed to sync a source stack onto a target stack."""

    source_stack_name: str
    target_stack_name: str
    parameter_overrides: Dict[str, str] = field(default_factory=dict)
    ignore_source_stack_status: bool = False
    role_arn: Optional[str] = None

    # Session and polling settings
    region: Optional[str] = None
    profile: Optional[str] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_poll_attempts: Optional[int] = None


def parse_overrides(text: str) -> Dict[str, str]:
    """
    Parse the parameter-overrides input.

    Args:
        text: JSON object mapping parameter keys to values

    Returns:
        Overrides with every value converted to a CloudFormation string

    Raises:
        InvalidOverrides: If the text is not a flat JSON object
    """
    try:
        overrides = json.loads(text)
    except (TypeError, ValueError):
        raise InvalidOverrides("The given parameter overrides failed to parse as JSON")

    try:
        validate(instance=overrides, schema=OVERRIDES_SCHEMA)
    except ValidationError as e:
        raise InvalidOverrides(
            f"The given parameter overrides are not a flat JSON object: {e.message}"
        )

    return {key: _to_parameter_value(value) for key, value in overrides.items()}


def _to_parameter_value(value: Union[str, int, float, bool]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_bool(value: Union[str, bool, None], default: bool = False) -> bool:
    """Interpret a "true"/"false" input the way GitHub Actions passes it."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load sync inputs from a YAML file keyed by input name."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file {path} is not valid YAML: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    # Allow the overrides to be written as a mapping instead of a JSON string
    overrides = data.get("parameter-overrides")
    if isinstance(overrides, dict):
        data["parameter-overrides"] = json.dumps(overrides)

    return data


def load_request(
    inputs: Dict[str, Any], config_file: Optional[Union[str, Path]] = None
) -> SyncRequest:
    """
    Build a SyncRequest from named inputs.

    Inputs that are None or empty fall back to the config file, if given.

    Raises:
        ConfigurationError: If a required input is missing or a polling
            setting is out of range
        InvalidOverrides: If parameter-overrides is not a flat JSON object
    """
    merged: Dict[str, Any] = load_config_file(config_file) if config_file else {}
    for key, value in inputs.items():
        if value is not None and value != "":
            merged[key] = value

    missing = [name for name in REQUIRED_INPUTS if not merged.get(name)]
    if missing:
        raise ConfigurationError(f"Input required and not supplied: {', '.join(missing)}")

    max_attempts = merged.get("max-poll-attempts")
    poll_interval = merged.get("poll-interval", DEFAULT_POLL_INTERVAL)
    try:
        max_attempts = int(max_attempts) if max_attempts not in (None, "") else None
        poll_interval = float(poll_interval)
    except ValueError as e:
        raise ConfigurationError(f"Invalid polling setting: {e}")

    if max_attempts is not None and max_attempts < 1:
        raise ConfigurationError(
            f"max-poll-attempts must be at least 1, got {max_attempts}"
        )
    if poll_interval < 0:
        raise ConfigurationError(
            f"poll-interval must not be negative, got {poll_interval:g}"
        )

    return SyncRequest(
        source_stack_name=str(merged["source-stack-name"]),
        target_stack_name=str(merged["target-stack-name"]),
        parameter_overrides=parse_overrides(str(merged["parameter-overrides"])),
        ignore_source_stack_status=parse_bool(merged.get("ignore-source-stack-status")),
        role_arn=merged.get("role-arn") or None,
        region=merged.get("region") or None,
        profile=merged.get("profile") or None,
        poll_interval=poll_interval,
        max_poll_attempts=max_attempts,
    )


def show_stack_trace() -> bool:
    """Whether failures should re-raise with full diagnostics."""
    return os.getenv("SHOW_STACK_TRACE", "false") == "true"
