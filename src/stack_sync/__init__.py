"""
stack-sync - Create or update a CloudFormation stack from another stack.
"""

__version__ = "1.0.0"

from .config import SyncRequest, load_request
from .sync import sync_stacks

__all__ = ["SyncRequest", "load_request", "sync_stacks"]
