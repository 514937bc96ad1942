"""Request dispatch pipeline.

Leaves first: host selection, credential attachment, response
classification, the retry controller, the dispatcher composing them, and
the task poller built on top of the dispatcher.
"""

from algolia_client.dispatch.classifier import classify, is_retryable
from algolia_client.dispatch.credentials import attach_credentials
from algolia_client.dispatch.dispatcher import Dispatcher
from algolia_client.dispatch.hosts import build_url, select_host
from algolia_client.dispatch.retry import dispatch_with_retry
from algolia_client.dispatch.tasks import TaskPoller

__all__ = [
    "Dispatcher",
    "TaskPoller",
    "attach_credentials",
    "build_url",
    "classify",
    "dispatch_with_retry",
    "is_retryable",
    "select_host",
]
