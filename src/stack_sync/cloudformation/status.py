"""
CloudFormation stack statuses and the readiness gate.
"""

import logging
from enum import Enum
from typing import FrozenSet

from ..errors import StatusRejected

logger = logging.getLogger(__name__)

SOURCE = "source"
TARGET = "target"


class StackStatus(Enum):
    """Every status CloudFormation reports for a stack."""

    CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
    CREATE_FAILED = "CREATE_FAILED"
    CREATE_COMPLETE = "CREATE_COMPLETE"
    ROLLBACK_IN_PROGRESS = "ROLLBACK_IN_PROGRESS"
    ROLLBACK_FAILED = "ROLLBACK_FAILED"
    ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"
    DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"
    DELETE_FAILED = "DELETE_FAILED"
    DELETE_COMPLETE = "DELETE_COMPLETE"
    UPDATE_IN_PROGRESS = "UPDATE_IN_PROGRESS"
    UPDATE_COMPLETE_CLEANUP_IN_PROGRESS = "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS"
    UPDATE_COMPLETE = "UPDATE_COMPLETE"
    UPDATE_FAILED = "UPDATE_FAILED"
    UPDATE_ROLLBACK_IN_PROGRESS = "UPDATE_ROLLBACK_IN_PROGRESS"
    UPDATE_ROLLBACK_FAILED = "UPDATE_ROLLBACK_FAILED"
    UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS = (
        "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS"
    )
    UPDATE_ROLLBACK_COMPLETE = "UPDATE_ROLLBACK_COMPLETE"
    REVIEW_IN_PROGRESS = "REVIEW_IN_PROGRESS"
    IMPORT_IN_PROGRESS = "IMPORT_IN_PROGRESS"
    IMPORT_COMPLETE = "IMPORT_COMPLETE"
    IMPORT_ROLLBACK_IN_PROGRESS = "IMPORT_ROLLBACK_IN_PROGRESS"
    IMPORT_ROLLBACK_FAILED = "IMPORT_ROLLBACK_FAILED"
    IMPORT_ROLLBACK_COMPLETE = "IMPORT_ROLLBACK_COMPLETE"

    @property
    def is_ready(self) -> bool:
        return self in READY_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_failed(self) -> bool:
        return "_FAILED" in self.value


# Stable statuses a stack may be read from or updated in place.
READY_STATUSES: FrozenSet[StackStatus] = frozenset(
    {
        StackStatus.CREATE_COMPLETE,
        StackStatus.UPDATE_COMPLETE,
        StackStatus.IMPORT_COMPLETE,
        StackStatus.ROLLBACK_COMPLETE,
        StackStatus.UPDATE_ROLLBACK_COMPLETE,
        StackStatus.IMPORT_ROLLBACK_COMPLETE,
    }
)

# Statuses CloudFormation will not leave without a new request.
TERMINAL_STATUSES: FrozenSet[StackStatus] = frozenset(
    {
        StackStatus.CREATE_COMPLETE,
        StackStatus.CREATE_FAILED,
        StackStatus.ROLLBACK_COMPLETE,
        StackStatus.ROLLBACK_FAILED,
        StackStatus.DELETE_COMPLETE,
        StackStatus.DELETE_FAILED,
        StackStatus.UPDATE_COMPLETE,
        StackStatus.UPDATE_FAILED,
        StackStatus.UPDATE_ROLLBACK_COMPLETE,
        StackStatus.UPDATE_ROLLBACK_FAILED,
        StackStatus.IMPORT_COMPLETE,
        StackStatus.IMPORT_ROLLBACK_COMPLETE,
        StackStatus.IMPORT_ROLLBACK_FAILED,
    }
)


def check_ready(descriptor, role: str, ignore_status: bool = False) -> None:
    """
    Ensure a stack is in a status usable for its role in the sync.

    Args:
        descriptor: StackDescriptor of the source or existing target stack
        role: "source" or "target"
        ignore_status: Accept any source status; has no effect on targets

    Raises:
        StatusRejected: If the status is not in READY_STATUSES
    """
    if role not in (SOURCE, TARGET):
        raise ValueError(f"Unknown stack role: {role}")

    status = descriptor.status
    if ignore_status and role == SOURCE:
        logger.info(f"Ignored {role} stack status {status.value}")
        return

    if not status.is_ready:
        raise StatusRejected(status.value, role)

    logger.info(f"Accepted {role} stack status {status.value}")
