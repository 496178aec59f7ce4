"""Mini README: Tests for the per-connection event dispatcher."""

from __future__ import annotations

import pytest

from tellodrone.drone_control import DEFAULT_EVENTS, EventDispatcher


def test_callbacks_run_in_attachment_order() -> None:
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.attach("message", lambda text: calls.append(("first", text)))
    dispatcher.attach("message", lambda text: calls.append(("second", text)))

    dispatcher.fire("message", "ok")

    assert calls == [("first", "ok"), ("second", "ok")]


def test_once_callbacks_are_removed_after_firing() -> None:
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.attach("_ok", lambda: calls.append("once"), once=True)
    dispatcher.attach("_ok", lambda: calls.append("always"))

    dispatcher.fire("_ok")
    dispatcher.fire("_ok")

    assert calls == ["once", "always", "always"]
    assert dispatcher.listener_count("_ok") == 1


def test_detach_removes_callback() -> None:
    dispatcher = EventDispatcher()
    calls = []

    def callback() -> None:
        calls.append("called")

    dispatcher.attach("connection", callback)
    assert dispatcher.detach("connection", callback)
    assert not dispatcher.detach("connection", callback)
    dispatcher.fire("connection")
    assert calls == []


def test_unknown_events_are_rejected() -> None:
    dispatcher = EventDispatcher()
    with pytest.raises(ValueError):
        dispatcher.attach("landing", lambda: None)
    with pytest.raises(ValueError):
        dispatcher.fire("landing")


def test_non_callable_callbacks_are_rejected() -> None:
    with pytest.raises(TypeError):
        EventDispatcher().attach("state", "not-callable")  # type: ignore[arg-type]


def test_dispatchers_do_not_share_callbacks() -> None:
    first, second = EventDispatcher(), EventDispatcher()
    calls = []
    first.attach("state", calls.append)

    second.fire("state", {"bat": 50.0})

    assert calls == []
    assert first.events == DEFAULT_EVENTS


def test_callback_errors_propagate() -> None:
    dispatcher = EventDispatcher()

    def explode(*_: object) -> None:
        raise RuntimeError("boom")

    dispatcher.attach("send", explode)
    with pytest.raises(RuntimeError):
        dispatcher.fire("send", "takeoff", 7)
