"""Observable value holder.

Lets views react to label (translation) and path (breadcrumb) changes on a
category without polling and without depending on a Qt property type.
Handlers are invoked synchronously after the value changed; a failing
handler is recorded in ``errors`` (bounded, newest kept) and does not stop
the others.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Generic, List, Protocol, TypeVar

__all__ = ["ObservableValue", "ValueChange", "ChangeHandler", "Subscription"]

T = TypeVar("T")

# Only the most recent subscriber failures are kept.
MAX_RECORDED_ERRORS = 100


@dataclass(frozen=True)
class ValueChange(Generic[T]):
    old: T
    new: T


class ChangeHandler(Protocol):
    def __call__(self, change: ValueChange) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    handler: ChangeHandler
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class ObservableValue(Generic[T]):
    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subs: List[Subscription] = []
        self._errors: Deque[tuple[ValueChange, BaseException]] = deque(maxlen=MAX_RECORDED_ERRORS)

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Assign ``value``; subscribers are notified only on an actual change."""
        old = self._value
        if old == value:
            return
        self._value = value
        change = ValueChange(old=old, new=value)
        for sub in list(self._subs):
            if not sub.active:
                continue
            try:
                sub.handler(change)
            except Exception as exc:  # noqa: BLE001 - isolate subscriber failures
                self._errors.append((change, exc))
        self._subs = [s for s in self._subs if s.active]

    def subscribe(self, handler: Callable[[ValueChange], Any]) -> Subscription:
        sub = Subscription(handler=handler)
        self._subs.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.cancel()
        self._subs = [s for s in self._subs if s is not sub]

    def subscriber_count(self) -> int:
        return sum(1 for s in self._subs if s.active)

    @property
    def errors(self) -> list[tuple[ValueChange, BaseException]]:
        return list(self._errors)

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"
