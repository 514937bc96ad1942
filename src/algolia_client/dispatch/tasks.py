"""Task polling — waits for an asynchronous indexing task to be published.

Write operations return a ``taskID``. The task status endpoint reports
``"published"`` once the write is visible and ``"notPublished"`` before
that. The poller checks, sleeps, and checks again, with no attempt cap;
each check is a full dispatch with its own transport retries.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from algolia_client import paths
from algolia_client.exceptions import TaskStatusError
from algolia_client.models.request import Method, Request, Role

if TYPE_CHECKING:
    from algolia_client.dispatch.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

PUBLISHED = "published"
NOT_PUBLISHED = "notPublished"

Sleep = Callable[[float], Awaitable[Any]]


class TaskPoller:
    """Polls task status through a :class:`Dispatcher`.

    Args:
        dispatcher: Dispatcher used for each status check.
        poll_interval: Default seconds to wait between checks.
        sleep: Coroutine function used to wait. Defaults to ``asyncio.sleep``.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        poll_interval: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._dispatcher = dispatcher
        self._poll_interval = poll_interval
        self._sleep = sleep

    async def wait_for_task(
        self,
        index: str,
        task_id: int | str,
        poll_interval: float | None = None,
        headers: list[tuple[str, str]] | None = None,
    ) -> dict[str, Any]:
        """Block until the task is published.

        Args:
            index: Index the task belongs to.
            task_id: Task ID returned by a write operation.
            poll_interval: Seconds between checks; overrides the default.
            headers: Extra headers sent with each status check.

        Returns:
            The final task status body.

        Raises:
            AlgoliaError: The error of the first failed status check.
            TaskStatusError: If the service reports an unknown status.
        """
        interval = self._poll_interval if poll_interval is None else poll_interval
        request = Request(
            method=Method.GET,
            path=paths.task(index, task_id),
            headers=tuple(headers or ()),
            role=Role.WRITE,
        )

        checks = 0
        while True:
            checks += 1
            result = await self._dispatcher.execute(request)
            body = result.unwrap()
            status = body.get("status") if isinstance(body, dict) else None

            if status == PUBLISHED:
                logger.info("Task %s on %s published after %d check(s)", task_id, index, checks)
                return body
            if status != NOT_PUBLISHED:
                raise TaskStatusError(index, task_id, status)

            logger.debug("Task %s on %s not published yet, sleeping %.2fs", task_id, index, interval)
            await self._sleep(interval)
