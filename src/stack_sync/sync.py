"""
Copy a source stack's template and parameters onto a target stack.
"""

import logging
import time
from typing import Callable, Optional

from .cloudformation.parameters import merge_parameters
from .cloudformation.poller import CompletionPoller
from .cloudformation.stack_manager import StackDescriptor, StackManager
from .cloudformation.status import SOURCE, TARGET, check_ready
from .cloudformation.synchronizer import StackSynchronizer
from .config import SyncRequest
from .errors import SourceNotFound

logger = logging.getLogger(__name__)


def sync_stacks(
    request: SyncRequest,
    stack_manager: Optional[StackManager] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> StackDescriptor:
    """
    Create or update the target stack from the source stack and wait for it.

    Every stage raises a StackSyncError on failure, which aborts the rest of
    the run. Both the template and the merged parameters are resolved before
    any create or update request is sent.

    Args:
        request: The sync to perform
        stack_manager: Stack manager to use, created from the request's
            region and profile if not given
        sleep: Called between two status checks of the target stack

    Returns:
        Final descriptor of the target stack
    """
    if stack_manager is None:
        stack_manager = StackManager(region=request.region, profile=request.profile)

    poller = CompletionPoller(
        stack_manager,
        sleep=sleep,
        interval=request.poll_interval,
        max_attempts=request.max_poll_attempts,
    )

    source = stack_manager.read_stack(request.source_stack_name)
    if source is None:
        raise SourceNotFound(request.source_stack_name)
    logger.info(f"Retrieved source stack {source.stack_id}")
    check_ready(source, SOURCE, ignore_status=request.ignore_source_stack_status)

    target = stack_manager.read_stack(request.target_stack_name)
    if target is not None:
        check_ready(target, TARGET)
    else:
        logger.info(
            f"Determined target stack {request.target_stack_name} does not exist, "
            "creating..."
        )

    template_body = stack_manager.read_template(request.source_stack_name)
    parameters = merge_parameters(source.parameter_set, request.parameter_overrides)

    synchronizer = StackSynchronizer(stack_manager.cloudformation)
    action = synchronizer.synchronize(
        request.target_stack_name,
        template_body,
        parameters,
        request.role_arn,
        target_exists=target is not None,
    )
    logger.debug(f"Sync action for {request.target_stack_name}: {action.value}")

    return poller.wait(request.target_stack_name)
