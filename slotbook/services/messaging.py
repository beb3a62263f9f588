"""
Typed message channel between the embedded booking page and its host.

The booking page posts two kinds of messages: a request to close the widget
and a notification that a booking went through. On the wire they are plain
mappings tagged with a ``type`` key.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

logger = logging.getLogger(__name__)

CLOSE_MESSAGE_TYPE = "agendame-close"
BOOKED_MESSAGE_TYPE = "agendame-booked"
BOOKED_EVENT_NAME = "agendame:booked"


@dataclass(frozen=True)
class CloseRequested:
    """The booking page asked its host to close the widget."""


@dataclass(frozen=True)
class BookingCompleted:
    """A booking was made; ``payload`` carries the booking record."""
    payload: Dict[str, Any] = field(default_factory=dict)


Message = Union[CloseRequested, BookingCompleted]
Listener = Callable[[Message], None]

MESSAGE_KINDS = (CloseRequested, BookingCompleted)


def parse_message(raw: Any) -> Optional[Message]:
    """
    Map a wire message to its typed form.

    Anything that is not a mapping with a known ``type`` yields ``None``.
    """
    if not isinstance(raw, Mapping):
        return None

    message_type = raw.get("type")
    if message_type == CLOSE_MESSAGE_TYPE:
        return CloseRequested()
    if message_type == BOOKED_MESSAGE_TYPE:
        booking = raw.get("booking")
        return BookingCompleted(payload=dict(booking) if isinstance(booking, Mapping) else {})
    return None


def to_wire(message: Message) -> Dict[str, Any]:
    """Serialize a typed message back to its wire mapping."""
    if isinstance(message, CloseRequested):
        return {"type": CLOSE_MESSAGE_TYPE}
    if isinstance(message, BookingCompleted):
        return {"type": BOOKED_MESSAGE_TYPE, "booking": dict(message.payload)}
    raise TypeError(f"Unsupported message: {message!r}")


class MessageChannel:
    """
    Dispatches messages to the listeners registered for their kind.

    Listeners run synchronously in registration order; an exception raised
    by a listener propagates to the caller of ``dispatch``.
    """

    def __init__(self) -> None:
        self._listeners: Dict[Type[Message], List[Listener]] = defaultdict(list)

    def subscribe(self, kind: Type[Message], listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` for messages of ``kind``.

        Returns:
            A callable that removes the registration again
        """
        if kind not in MESSAGE_KINDS:
            raise ValueError(f"Unknown message kind: {kind!r}")

        self._listeners[kind].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[kind]:
                self._listeners[kind].remove(listener)

        return unsubscribe

    def dispatch(self, message: Message) -> int:
        """Deliver ``message``; returns the number of listeners notified."""
        listeners = list(self._listeners.get(type(message), []))
        for listener in listeners:
            listener(message)
        return len(listeners)

    def dispatch_raw(self, raw: Any) -> Optional[Message]:
        """Parse a wire message and dispatch it. Unknown messages are ignored."""
        message = parse_message(raw)
        if message is None:
            logger.debug("Ignoring unknown message: %r", raw)
            return None

        self.dispatch(message)
        return message
