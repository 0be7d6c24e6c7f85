"""Tests for the async helpers of the Kubernetes layer."""

import asyncio

import pytest

from src.infra.k8s.utils import join_all, run_sync


async def _succeed(delay: float, done: list[str], name: str) -> None:
    await asyncio.sleep(delay)
    done.append(name)


async def _fail(delay: float, error: Exception) -> None:
    await asyncio.sleep(delay)
    raise error


class TestJoinAll:
    """Tests for join_all."""

    @pytest.mark.asyncio
    async def test_all_succeed(self) -> None:
        done: list[str] = []

        errors = await join_all(_succeed(0, done, str(i)) for i in range(3))

        assert errors == []
        assert sorted(done) == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_failure_does_not_cancel_others(self) -> None:
        done: list[str] = []
        error = RuntimeError("fast failure")

        errors = await join_all([_fail(0, error), _succeed(0.05, done, "slow")])

        assert errors == [error]
        assert done == ["slow"]

    @pytest.mark.asyncio
    async def test_errors_in_completion_order(self) -> None:
        slow = RuntimeError("slow")
        fast = RuntimeError("fast")

        errors = await join_all([_fail(0.05, slow), _fail(0, fast)])

        assert errors == [fast, slow]

    @pytest.mark.asyncio
    async def test_nothing_to_join(self) -> None:
        assert await join_all([]) == []


def test_run_sync_returns_result() -> None:
    async def compute() -> int:
        await asyncio.sleep(0)
        return 42

    assert run_sync(compute()) == 42


@pytest.mark.asyncio
async def test_run_sync_inside_running_loop() -> None:
    async def compute() -> str:
        return "done"

    assert run_sync(compute()) == "done"
