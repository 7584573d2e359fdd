"""
CloudFormation stack reading, provisioning and status tracking.
"""

from .parameters import merge_parameters, to_cloudformation
from .poller import CompletionPoller, PollState
from .stack_manager import StackDescriptor, StackManager
from .status import READY_STATUSES, TERMINAL_STATUSES, StackStatus, check_ready
from .synchronizer import StackSynchronizer, SyncAction

__all__ = [
    "CompletionPoller",
    "PollState",
    "READY_STATUSES",
    "StackDescriptor",
    "StackManager",
    "StackStatus",
    "StackSynchronizer",
    "SyncAction",
    "TERMINAL_STATUSES",
    "check_ready",
    "merge_parameters",
    "to_cloudformation",
]
