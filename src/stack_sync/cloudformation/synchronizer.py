"""
Create or update the target stack.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..errors import ProvisioningError
from .parameters import ParameterSet, to_cloudformation
from .stack_manager import (
    CREDENTIAL_ERROR_CODES,
    PERMISSION_ERROR_CODES,
    translate_client_error,
)

logger = logging.getLogger(__name__)

CAPABILITIES = ["CAPABILITY_IAM", "CAPABILITY_NAMED_IAM", "CAPABILITY_AUTO_EXPAND"]
NO_UPDATES_MESSAGE = "No updates are to be performed"


class SyncAction(Enum):
    """What the synchronizer asked CloudFormation to do."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class StackSynchronizer:
    """Issue the create or update request for a target stack."""

    def __init__(self, cloudformation: Any):
        """
        Args:
            cloudformation: boto3 CloudFormation client
        """
        self.cloudformation = cloudformation

    def synchronize(
        self,
        target_name: str,
        template_body: str,
        parameters: ParameterSet,
        role_arn: Optional[str],
        target_exists: bool,
    ) -> SyncAction:
        """
        Create the target stack, or update it in place if it already exists.

        New stacks are deleted by CloudFormation if creation fails. Updates
        always send the template body rather than reusing the stored one.

        Raises:
            CredentialsInvalid: If the credentials are rejected
            PermissionDenied: If the credentials may not create or update stacks
            ProvisioningError: If CloudFormation rejects the request
        """
        params: Dict[str, Any] = {
            "StackName": target_name,
            "TemplateBody": template_body,
            "Parameters": to_cloudformation(parameters),
            "Capabilities": list(CAPABILITIES),
        }
        if role_arn:
            params["RoleARN"] = role_arn

        if target_exists:
            return self._update(params)
        return self._create(params)

    def _create(self, params: Dict[str, Any]) -> SyncAction:
        stack_name = params["StackName"]
        try:
            self.cloudformation.create_stack(OnFailure="DELETE", **params)
        except (ClientError, BotoCoreError) as e:
            if _is_access_error(e):
                raise translate_client_error(e, "create stacks")
            raise ProvisioningError(stack_name, "create", _error_message(e))

        logger.info(f"Created target stack {stack_name}")
        return SyncAction.CREATED

    def _update(self, params: Dict[str, Any]) -> SyncAction:
        stack_name = params["StackName"]
        try:
            self.cloudformation.update_stack(UsePreviousTemplate=False, **params)
        except ClientError as e:
            if _is_access_error(e):
                raise translate_client_error(e, "update stacks")
            message = _error_message(e)
            if NO_UPDATES_MESSAGE in message:
                logger.info(f"Target stack {stack_name} is already up to date")
                return SyncAction.UNCHANGED
            raise ProvisioningError(stack_name, "update", message)
        except BotoCoreError as e:
            if _is_access_error(e):
                raise translate_client_error(e, "update stacks")
            raise ProvisioningError(stack_name, "update", str(e))

        logger.info(f"Updated target stack {stack_name}")
        return SyncAction.UPDATED


def _is_access_error(error: Exception) -> bool:
    """Check whether a failure is about credentials or permissions."""
    if isinstance(error, NoCredentialsError):
        return True
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        return code in CREDENTIAL_ERROR_CODES or code in PERMISSION_ERROR_CODES
    return False


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Message") or str(error)
    return str(error)
