"""
CloudFormation stack lookups.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..errors import CredentialsInvalid, PermissionDenied, ProviderError
from .parameters import ParameterSet
from .status import StackStatus

logger = logging.getLogger(__name__)

CREDENTIAL_ERROR_CODES = (
    "SignatureDoesNotMatch",
    "InvalidClientTokenId",
    "UnrecognizedClientException",
    "ExpiredToken",
)
PERMISSION_ERROR_CODES = ("AccessDenied", "AccessDeniedException")


@dataclass(frozen=True)
class StackDescriptor:
    """Snapshot of a stack as CloudFormation reported it."""

    stack_id: str
    name: str
    status: StackStatus
    parameters: Tuple[Tuple[str, str], ...] = ()

    @property
    def parameter_set(self) -> ParameterSet:
        return dict(self.parameters)

    @classmethod
    def from_response(cls, stack: Dict[str, Any]) -> "StackDescriptor":
        """Build a descriptor from one entry of a DescribeStacks response."""
        try:
            status = StackStatus(stack["StackStatus"])
        except ValueError:
            raise ProviderError(
                f"Stack {stack['StackName']} reported unknown status "
                f"{stack['StackStatus']}"
            )

        return cls(
            stack_id=stack["StackId"],
            name=stack["StackName"],
            status=status,
            parameters=tuple(
                (param["ParameterKey"], param.get("ParameterValue", ""))
                for param in stack.get("Parameters", [])
            ),
        )


def translate_client_error(error: Exception, operation: str) -> Exception:
    """
    Map a botocore failure to a stack sync error.

    Args:
        error: Exception raised by the CloudFormation client
        operation: Human readable description of the attempted call

    Returns:
        The exception to raise in its place
    """
    if isinstance(error, NoCredentialsError):
        return CredentialsInvalid("No AWS credentials were found")

    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code in CREDENTIAL_ERROR_CODES:
            return CredentialsInvalid()
        if code in PERMISSION_ERROR_CODES:
            return PermissionDenied(operation)
        message = error.response.get("Error", {}).get("Message") or str(error)
        return ProviderError(f"Failed to {operation}: {message}", code=code)

    return ProviderError(f"Failed to {operation}: {error}")


def is_missing_stack(error: ClientError) -> bool:
    """Check whether a ClientError says the stack does not exist."""
    details = error.response.get("Error", {})
    return details.get("Code") == "ValidationError" and "does not exist" in str(
        details.get("Message", "")
    )


class StackManager:
    """Read CloudFormation stacks."""

    def __init__(self, region: Optional[str] = None, profile: Optional[str] = None):
        """
        Initialize stack manager.

        Args:
            region: AWS region, defaults to the session's configured region
            profile: AWS profile to use
        """
        session_args = {}
        if region:
            session_args["region_name"] = region
        if profile:
            session_args["profile_name"] = profile

        session = boto3.Session(**session_args)
        self.region = region or session.region_name
        self.profile = profile
        self.cloudformation = session.client("cloudformation")

    def read_stack(self, stack_name: str) -> Optional[StackDescriptor]:
        """
        Describe a stack.

        Returns:
            The stack's descriptor, or None if it does not exist
        """
        try:
            response = self.cloudformation.describe_stacks(StackName=stack_name)
        except ClientError as e:
            if is_missing_stack(e):
                return None
            raise translate_client_error(e, "describe stacks")
        except BotoCoreError as e:
            raise translate_client_error(e, "describe stacks")

        stacks = response.get("Stacks", [])
        if not stacks:
            return None
        return StackDescriptor.from_response(stacks[0])

    def read_template(self, stack_name: str) -> str:
        """
        Get the original, unprocessed template body of a stack.

        JSON templates come back from boto3 already decoded, so they are
        serialized again to be sent as a TemplateBody.
        """
        try:
            response = self.cloudformation.get_template(
                StackName=stack_name, TemplateStage="Original"
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_client_error(e, f"get the template of {stack_name}")

        body = response["TemplateBody"]
        if isinstance(body, str):
            return body
        return json.dumps(body)
