"""
Tests for the event registry.
"""

import pytest

from minesweeper.events import EventRegistry


class TestEventRegistry:

    def test_fires_in_order(self):
        registry = EventRegistry("win")
        calls = []
        registry.add(lambda: calls.append("a"))
        registry.add(lambda: calls.append("b"))
        registry.fire()
        assert calls == ["a", "b"]

    def test_fire_with_no_callbacks(self):
        EventRegistry("start").fire()

    def test_fire_twice_calls_twice(self):
        registry = EventRegistry("loss")
        calls = []
        registry.add(lambda: calls.append(1))
        registry.fire()
        registry.fire()
        assert calls == [1, 1]

    def test_works_as_decorator(self):
        registry = EventRegistry("start")

        @registry.add
        def on_start():
            pass

        assert list(registry) == [on_start]
        assert len(registry) == 1

    def test_rejects_non_callable(self):
        registry = EventRegistry("start")
        with pytest.raises(TypeError):
            registry.add("not a function")
        assert len(registry) == 0

    def test_callback_added_while_firing_waits_for_next_fire(self):
        registry = EventRegistry("win")
        calls = []

        def first():
            calls.append("first")
            registry.add(lambda: calls.append("late"))

        registry.add(first)
        registry.fire()
        assert calls == ["first"]
