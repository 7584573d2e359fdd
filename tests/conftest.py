"""
Shared fixtures for stack-sync tests.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from stack_sync.cloudformation.stack_manager import StackManager


def make_stack(
    name: str, status: str, parameters: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """Build one entry of a DescribeStacks response."""
    return {
        "StackId": f"arn:aws:cloudformation:us-east-1:123456789012:stack/{name}/abc123",
        "StackName": name,
        "StackStatus": status,
        "Parameters": [
            {"ParameterKey": key, "ParameterValue": value}
            for key, value in (parameters or {}).items()
        ],
    }


def missing_stack_error(name: str) -> ClientError:
    """Error CloudFormation raises when describing an unknown stack."""
    return ClientError(
        {
            "Error": {
                "Code": "ValidationError",
                "Message": f"Stack with id {name} does not exist",
            }
        },
        "DescribeStacks",
    )


def describe_responses(sequences: Dict[str, List[Any]]):
    """
    Build a describe_stacks side effect that replays results per stack name.

    Each item is a stack dict or an exception to raise. The last item of a
    sequence is repeated once the others are used up.
    """
    remaining = {name: list(items) for name, items in sequences.items()}

    def describe_stacks(StackName: str) -> Dict[str, Any]:
        items = remaining[StackName]
        item = items.pop(0) if len(items) > 1 else items[0]
        if isinstance(item, Exception):
            raise item
        return {"Stacks": [item]}

    return describe_stacks


@pytest.fixture
def stack_factory():
    return make_stack


@pytest.fixture
def missing_stack():
    return missing_stack_error


@pytest.fixture
def describe_sequence():
    return describe_responses


@pytest.fixture
def manager() -> StackManager:
    """StackManager with a mocked CloudFormation client."""
    with patch("boto3.Session"):
        manager = StackManager(region="us-east-1")

    manager.cloudformation = Mock()
    return manager
