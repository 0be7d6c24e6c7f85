"""Tests for watch-confirmed namespace deletion."""

from collections.abc import AsyncIterator
from unittest.mock import MagicMock

import pytest

from src.cli.deployment.release_purger import NamespaceTerminator
from src.infra.k8s.controller import NamespaceInfo, WatchEvent
from src.utils.errors import NamespaceWatchError, ResourceDeletionError


def _stream(*event_types: str, error: Exception | None = None):
    """Build a watch_namespace replacement yielding the given event types."""
    seen: list[NamespaceInfo] = []

    async def watch(namespace: NamespaceInfo) -> AsyncIterator[WatchEvent]:
        seen.append(namespace)
        for event_type in event_types:
            yield WatchEvent(type=event_type, name=namespace.name)
        if error is not None:
            raise error

    watch.seen = seen  # type: ignore[attr-defined]
    return watch


@pytest.fixture
def controller(mock_controller: MagicMock) -> MagicMock:
    mock_controller.get_namespace.return_value = NamespaceInfo("app-ns", resource_version="42")
    return mock_controller


@pytest.mark.asyncio
async def test_deleted_event_ends_the_wait(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("DELETED")

    await NamespaceTerminator(controller).terminate("app-ns")

    controller.delete_namespace.assert_awaited_once_with(
        "app-ns", propagation_policy="Foreground"
    )


@pytest.mark.asyncio
async def test_other_events_are_ignored(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("ADDED", "MODIFIED", "MODIFIED", "DELETED")

    await NamespaceTerminator(controller).terminate("app-ns")


@pytest.mark.asyncio
async def test_error_event_fails(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("MODIFIED", "ERROR", "DELETED")

    with pytest.raises(NamespaceWatchError, match="failed to delete namespace app-ns"):
        await NamespaceTerminator(controller).terminate("app-ns")


@pytest.mark.asyncio
async def test_stream_end_without_deletion_fails(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("MODIFIED")

    with pytest.raises(NamespaceWatchError, match="ended before"):
        await NamespaceTerminator(controller).terminate("app-ns")


@pytest.mark.asyncio
async def test_broken_stream_fails(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("MODIFIED", error=ConnectionResetError("reset"))

    with pytest.raises(NamespaceWatchError) as excinfo:
        await NamespaceTerminator(controller).terminate("app-ns")

    assert excinfo.value.details == "reset"


@pytest.mark.asyncio
async def test_watch_starts_at_fetched_version(controller: MagicMock) -> None:
    watch = _stream("DELETED")
    controller.watch_namespace = watch

    await NamespaceTerminator(controller).terminate("app-ns")

    assert watch.seen == [NamespaceInfo("app-ns", resource_version="42")]


@pytest.mark.asyncio
async def test_missing_namespace_fails_before_delete(controller: MagicMock) -> None:
    controller.get_namespace.side_effect = RuntimeError("namespaces 'app-ns' not found")

    with pytest.raises(ResourceDeletionError, match="failed to get namespace app-ns"):
        await NamespaceTerminator(controller).terminate("app-ns")

    controller.delete_namespace.assert_not_awaited()


@pytest.mark.asyncio
async def test_rejected_delete_fails(controller: MagicMock) -> None:
    controller.watch_namespace = _stream("DELETED")
    controller.delete_namespace.side_effect = RuntimeError("forbidden")

    with pytest.raises(ResourceDeletionError, match="failed to delete namespace app-ns"):
        await NamespaceTerminator(controller).terminate("app-ns")
