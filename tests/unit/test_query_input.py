"""QueryInputCoordinator debounce behaviour (short real windows)."""

import asyncio

import pytest

from unified_search.application.services.query_input import QueryInputCoordinator

WINDOW = 0.05


async def test_burst_of_changes_emits_once_with_last_text() -> None:
    """Three changes within the window produce exactly one settled emission."""
    coordinator = QueryInputCoordinator(debounce_seconds=WINDOW)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("c")
    await asyncio.sleep(WINDOW / 10)
    coordinator.on_text_changed("ch")
    await asyncio.sleep(WINDOW / 10)
    coordinator.on_text_changed("cho")
    assert coordinator.is_debouncing

    await asyncio.sleep(WINDOW * 3)

    assert settled == ["cho"]
    assert not coordinator.is_debouncing
    assert coordinator.text == "cho"


async def test_separate_pauses_emit_separately() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=WINDOW)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("a")
    await asyncio.sleep(WINDOW * 3)
    coordinator.on_text_changed("ab")
    await asyncio.sleep(WINDOW * 3)

    assert settled == ["a", "ab"]


async def test_cancel_pending_drops_emission() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=WINDOW)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("chores")
    assert coordinator.cancel_pending() is True
    await asyncio.sleep(WINDOW * 3)

    assert settled == []
    assert coordinator.cancel_pending() is False


async def test_flush_settles_immediately() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=10)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("now")
    coordinator.flush()

    assert settled == ["now"]
    assert not coordinator.is_debouncing


async def test_whitespace_text_is_still_emitted() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=0)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("   ")
    coordinator.flush()

    assert settled == ["   "]


async def test_async_listener_is_scheduled_and_drained() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=0)
    received: list[str] = []

    async def listener(text: str) -> None:
        await asyncio.sleep(0)
        received.append(text)

    coordinator.subscribe(listener)
    coordinator.on_text_changed("async")
    coordinator.flush()
    await coordinator.drain()

    assert received == ["async"]


async def test_unsubscribe_stops_delivery() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=0)
    settled: list[str] = []
    unsubscribe = coordinator.subscribe(settled.append)
    unsubscribe()

    coordinator.on_text_changed("x")
    coordinator.flush()

    assert settled == []


async def test_set_text_does_not_start_debounce() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=WINDOW)
    coordinator.on_text_changed("typed")
    coordinator.set_text("chosen")

    assert coordinator.text == "chosen"
    assert not coordinator.is_debouncing


async def test_close_cancels_timer() -> None:
    coordinator = QueryInputCoordinator(debounce_seconds=WINDOW)
    settled: list[str] = []
    coordinator.subscribe(settled.append)

    coordinator.on_text_changed("x")
    coordinator.close()
    await asyncio.sleep(WINDOW * 3)

    assert settled == []


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        QueryInputCoordinator(debounce_seconds=-1)


def test_default_window_comes_from_settings(monkeypatch) -> None:
    from unified_search.core.config import get_settings

    monkeypatch.setenv("UNIFIED_SEARCH_DEBOUNCE_MS", "150")
    get_settings.cache_clear()

    assert QueryInputCoordinator().debounce_seconds == pytest.approx(0.15)
