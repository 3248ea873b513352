"""Run independent reads of one request concurrently and join them."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any

from flask import current_app

DEFAULT_WORKERS = 4


def run_parallel(tasks: Mapping[str, Callable[[], Any]], *, max_workers: int = DEFAULT_WORKERS) -> dict[str, Any]:
    """Run every task and return their results keyed like `tasks`.

    The first task to fail (in completion order) wins: tasks that have not
    started yet are cancelled and its exception is re-raised. Tasks already
    running are left to finish in the background.
    """

    if not tasks:
        return {}

    executor = ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(tasks))),
        thread_name_prefix="request-read",
    )
    futures: dict[Future, str] = {executor.submit(fn): key for key, fn in tasks.items()}

    results: dict[str, Any] = {}
    try:
        for future in as_completed(futures):
            exc = future.exception()
            if exc is not None:
                raise exc
            results[futures[future]] = future.result()
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise

    executor.shutdown(wait=True)
    return {key: results[key] for key in tasks}


def configured_workers() -> int:
    """PARALLEL_WORKERS of the current application."""

    return int(current_app.config.get("PARALLEL_WORKERS", DEFAULT_WORKERS))
