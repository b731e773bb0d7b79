from __future__ import annotations

from typing import TYPE_CHECKING

from tick_city.state import Notification

if TYPE_CHECKING:
    from tick_city.state import WorldState

DANGER = "danger"
GOOD = "good"
INFO = "info"

_EVENT_KINDS = {"fire": DANGER, "storm": DANGER, "boom": GOOD}


def kind_for_event(event_type: str) -> str:
    return _EVENT_KINDS.get(event_type, INFO)


def notify(state: WorldState, text: str, kind: str = INFO) -> None:
    """Append a notification. The log is bounded, so the oldest entry may drop."""
    state.notifications.append(Notification(text=text, kind=kind, tick=state.tick))


def recent(state: WorldState, kind: str | None = None, after: int | None = None) -> list[Notification]:
    result = list(state.notifications)
    if kind is not None:
        result = [n for n in result if n.kind == kind]
    if after is not None:
        result = [n for n in result if n.tick > after]
    return result
