"""Fixed-arity concurrent join over independent, blocking resolutions."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, wait
from typing import Any

logger = logging.getLogger(__name__)


def _run(task: Callable[[], Any], future: Future[Any]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = task()
    except BaseException as e:
        future.set_exception(e)
    else:
        future.set_result(result)


def gather(**tasks: Callable[[], Any]) -> dict[str, Any]:
    """Run each task on its own worker and return results keyed by task name.

    Waits until every task has finished or one has raised. The first failure
    observed is re-raised; tasks still running are left behind on daemon
    threads, so they neither delay process exit nor report back.
    """

    if not tasks:
        return {}

    futures: dict[Future[Any], str] = {}
    for name, task in tasks.items():
        future: Future[Any] = Future()
        futures[future] = name
        threading.Thread(
            target=_run,
            name=f"pullr-gather-{name}",
            daemon=True,
            kwargs={"task": task, "future": future},
        ).start()

    done, _pending = wait(futures, return_when=FIRST_EXCEPTION)

    for future in done:
        error = future.exception()
        if error is not None:
            logger.debug(
                "Gather task failed", extra={"task": futures[future], "error": str(error)}
            )
            raise error

    return {name: future.result() for future, name in futures.items()}
