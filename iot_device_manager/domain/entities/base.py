"""
Base classes for domain entities.

Entities publish field-level change notifications through an explicit
publish/subscribe hook instead of framework binding plumbing.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, ClassVar, Dict, List, Tuple

_MISSING = object()


def utc_now() -> datetime:
    """Return current UTC timestamp."""
    return datetime.now(timezone.utc)


class EventHook:
    """
    A list of handlers invoked synchronously, in subscription order.

    Handlers are called with whatever positional arguments are passed
    to publish(). Exceptions raised by a handler propagate to the publisher.
    """

    def __init__(self, name: str = "event"):
        self.name = name
        self._handlers: List[Callable[..., Any]] = []

    def subscribe(self, handler: Callable[..., Any]) -> Callable[[], None]:
        """
        Register a handler.

        Returns:
            A callable that removes the handler again.
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(handler)

        return unsubscribe

    def unsubscribe(self, handler: Callable[..., Any]) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def publish(self, *args: Any) -> None:
        """Invoke every handler with the given arguments."""
        for handler in list(self._handlers):
            handler(*args)

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"<EventHook {self.name} handlers={len(self._handlers)}>"


@dataclass
class ObservableEntity:
    """
    Base class for entities whose mutations are observable.

    Assigning a new value to a public field publishes (entity, field_name)
    to every subscribed observer. Subclasses list computed properties that
    depend on a field in `_derived_fields`, and those names are published too.
    """
    _observers: EventHook = field(
        default_factory=lambda: EventHook("field_changed"),
        init=False,
        repr=False,
        compare=False,
    )

    _derived_fields: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    def __setattr__(self, name: str, value: Any) -> None:
        hook = self.__dict__.get("_observers")
        if hook is None or name.startswith("_"):
            object.__setattr__(self, name, value)
            return

        old = self.__dict__.get(name, _MISSING)
        object.__setattr__(self, name, value)

        if old is not _MISSING and old != value:
            self._notify(name)

    def _notify(self, field_name: str) -> None:
        self._observers.publish(self, field_name)
        for derived in self._derived_fields.get(field_name, ()):
            self._observers.publish(self, derived)

    def subscribe(self, observer: Callable[[Any, str], Any]) -> Callable[[], None]:
        """
        Subscribe to field changes.

        Args:
            observer: Called as observer(entity, field_name) after each change.

        Returns:
            A callable that removes the observer.
        """
        return self._observers.subscribe(observer)

    def unsubscribe(self, observer: Callable[[Any, str], Any]) -> bool:
        """Remove a previously subscribed observer."""
        return self._observers.unsubscribe(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)
