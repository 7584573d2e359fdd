"""
Wait for a stack to reach a terminal status.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from ..errors import (
    ConfigurationError,
    PollingTimeout,
    ProvisioningFailed,
    StackDeleted,
)

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 15


class PollState(Enum):
    """Progress of a stack operation as seen by the poller."""

    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def classify(descriptor) -> PollState:
    """Map a stack snapshot, or None for a vanished stack, to a poll state."""
    if descriptor is None:
        return PollState.FAILED
    if not descriptor.status.is_terminal:
        return PollState.POLLING
    if descriptor.status.is_failed:
        return PollState.FAILED
    return PollState.SUCCEEDED


class CompletionPoller:
    """Re-read a stack at a fixed interval until it settles."""

    def __init__(
        self,
        stack_manager,
        sleep: Callable[[float], None] = time.sleep,
        interval: float = POLL_INTERVAL_SECONDS,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize the poller.

        Args:
            stack_manager: StackManager used to read the stack
            sleep: Called with the interval between two status checks
            interval: Seconds between status checks
            max_attempts: Give up after this many status checks; None waits forever
        """
        if max_attempts is not None and max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be at least 1, got {max_attempts}"
            )
        if interval < 0:
            raise ConfigurationError(f"interval must not be negative, got {interval}")

        self.stack_manager = stack_manager
        self.sleep = sleep
        self.interval = interval
        self.max_attempts = max_attempts

    def wait(self, stack_name: str):
        """
        Block until the stack reaches a terminal status.

        Returns:
            The final StackDescriptor when the stack succeeded

        Raises:
            StackDeleted: The stack disappeared while waiting
            ProvisioningFailed: The stack settled in a failed status
            PollingTimeout: max_attempts checks passed without a terminal status
        """
        attempts = 1
        stack = self.stack_manager.read_stack(stack_name)
        state = classify(stack)

        while state is PollState.POLLING:
            logger.info(f"Target stack {stack_name} in state {stack.status.value}")
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise PollingTimeout(stack_name, attempts, stack.status.value)

            self.sleep(self.interval)
            attempts += 1
            stack = self.stack_manager.read_stack(stack_name)
            state = classify(stack)

        if stack is None:
            raise StackDeleted(stack_name)
        if state is PollState.FAILED:
            raise ProvisioningFailed(stack_name, stack.status.value)

        logger.info(
            f"Target stack {stack_name} updated successfully in state "
            f"{stack.status.value}"
        )
        return stack
