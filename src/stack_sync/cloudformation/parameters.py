"""
Stack parameter merging.
"""

from typing import Dict, List

ParameterSet = Dict[str, str]


def merge_parameters(source: ParameterSet, overrides: ParameterSet) -> ParameterSet:
    """
    Merge live source parameters with caller overrides.

    Keys keep the source stack's order, followed by keys that only appear in
    the overrides. An override always wins over the source value.

    Args:
        source: Parameter values of the source stack
        overrides: Caller-supplied parameter values

    Returns:
        New parameter set for the target stack
    """
    merged = dict(source)
    for key, value in overrides.items():
        merged[key] = value
    return merged


def to_cloudformation(parameters: ParameterSet) -> List[Dict[str, str]]:
    """Render a parameter set as the CloudFormation Parameters list."""
    return [
        {"ParameterKey": key, "ParameterValue": value}
        for key, value in parameters.items()
    ]
