"""Observable input controls.

A control holds the current value of one user input (search text, page
number) and notifies listeners when it changes. Writers can opt out of the
notification with `emit_event=False`, which is how the page is reset without
being seen as a user pagination.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class ValueControl(Generic[T]):
    """Single mutable value plus a listener list."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def set_value(self, value: T, *, emit_event: bool = True) -> None:
        """Store `value` and, unless `emit_event` is False, notify listeners."""

        self._value = value
        if not emit_event:
            return
        # Listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register `listener` and return the function that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
