"""
Interaction vocabulary for the target editor.

Toolkit-independent enums and value types that the views translate
mouse and keyboard events into before handing them to the controller.
"""

from dataclasses import dataclass
from enum import Enum, auto


class Tool(Enum):
    """Tools available on the editor tool bar."""
    CURSOR = auto()
    IMAGE = auto()
    RECTANGLE = auto()
    OVAL = auto()
    TRIANGLE = auto()
    APPLESEED_THREE = auto()
    APPLESEED_FOUR = auto()
    APPLESEED_FIVE = auto()
    FREEFORM = auto()

    @property
    def is_placement(self) -> bool:
        """True for tools that place a candidate region that follows the pointer."""
        return self not in (Tool.CURSOR, Tool.FREEFORM)


class InteractionMode(Enum):
    """Controller state."""
    IDLE = "idle"           # Selecting/manipulating committed regions
    PLACING = "placing"     # A candidate region tracks the pointer
    TRACING = "tracing"     # Freeform polygon under construction


class PointerButton(Enum):
    """Mouse buttons."""
    PRIMARY = auto()
    SECONDARY = auto()
    MIDDLE = auto()


class Key(Enum):
    """Keys the editor reacts to."""
    DELETE = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    Z = auto()
    OTHER = auto()


ARROW_KEYS = (Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN)


@dataclass(frozen=True)
class KeyPress:
    """A key press with its modifier state."""
    key: Key
    shift: bool = False
    ctrl: bool = False


__all__ = [
    "Tool",
    "InteractionMode",
    "PointerButton",
    "Key",
    "KeyPress",
    "ARROW_KEYS",
]
