from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from .navigation import NavCommand

PressPhase = Literal["down", "repeat", "up", "cancel"]

KEY_COMMANDS: dict[str, NavCommand] = {
    "ArrowUp": "up",
    "ArrowDown": "down",
    "PageUp": "page_up",
    "PageDown": "page_down",
    "Enter": "activate",
}


@dataclass(frozen=True)
class KeyPressEvent:
    """Minimal normalized key press consumed by the grid."""

    phase: PressPhase
    key: str

    @property
    def triggers(self) -> bool:
        return self.phase in ("down", "repeat")


def parse_key_event(event_type: str, payload: object) -> KeyPressEvent | None:
    """Parse a normalized ``press`` payload into a typed key event.

    Unknown event types, phases or payload shapes yield ``None``.
    """

    if event_type != "press" or not isinstance(payload, Mapping):
        return None
    phase = payload.get("phase")
    if phase not in {"down", "repeat", "up", "cancel"}:
        return None
    return KeyPressEvent(phase=phase, key=str(payload.get("key", "")))


def command_for_key(key: str) -> NavCommand | None:
    return KEY_COMMANDS.get(key)
