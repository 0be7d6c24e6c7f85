"""Utility functions for the Kubernetes infrastructure layer.

Provides helpers for running async code in sync contexts and for joining
groups of concurrently running operations.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Coroutine, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine in a blocking sync context.

    This is useful for calling async KubernetesController methods
    from synchronous CLI commands.

    Args:
        coro: The coroutine to execute

    Returns:
        The result of the coroutine

    Example:
        from src.infra.k8s import get_k8s_controller, run_sync

        controller = get_k8s_controller()
        info = run_sync(controller.get_namespace("my-namespace"))
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop, create a new one
        return asyncio.run(coro)
    else:
        if loop.is_running():
            # Run on a fresh loop in a worker thread to avoid blocking this one
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor() as pool:
                future = pool.submit(asyncio.run, coro)
                return future.result()
        return loop.run_until_complete(coro)


async def join_all(aws: Iterable[Awaitable[Any]]) -> list[Exception]:
    """Run awaitables concurrently and wait for every one of them.

    Exactly as many results are collected as awaitables were started. A
    failure never cancels the others.

    Args:
        aws: Awaitables to run

    Returns:
        The exceptions raised, in the order the failing tasks finished.
        Empty if all succeeded.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    errors: list[Exception] = []
    for finished in asyncio.as_completed(tasks):
        try:
            await finished
        except Exception as exc:
            errors.append(exc)
    return errors
