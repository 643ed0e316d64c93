"""
Canvas model.

The ordered list of everything drawn on the editing canvas: committed
regions, the candidate region and freeform preview primitives. Later
children are drawn on top. Like a scene graph, a child may only appear
once; inserting a child that is already present is an error.

Views mirror this list; they never own it.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple


class DuplicateChildError(ValueError):
    """Raised when a child already on the canvas is inserted again."""


@dataclass(eq=False)
class VertexMarker:
    """Dot drawn at a freeform vertex."""
    x: float
    y: float
    radius: float = 3.0


@dataclass(eq=False)
class EdgeLine:
    """Line segment drawn between freeform vertices (dashed for the live preview)."""
    x1: float
    y1: float
    x2: float
    y2: float
    dash: Tuple[float, ...] = ()

    @property
    def is_dashed(self) -> bool:
        return bool(self.dash)


class CanvasModel:
    """
    Ordered child list of the editing canvas.

    Membership is by identity. ``background`` is the image drawn beneath
    all children and is not a child itself.
    """

    def __init__(self):
        self._children: List[Any] = []
        self.background: Any = None

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._children))

    def __contains__(self, child: Any) -> bool:
        return any(c is child for c in self._children)

    @property
    def children(self) -> List[Any]:
        """A copy of the children in drawing order."""
        return list(self._children)

    def index_of(self, child: Any) -> int:
        for i, c in enumerate(self._children):
            if c is child:
                return i
        raise ValueError(f"{child!r} is not on the canvas")

    def add(self, child: Any):
        """Append a child on top of everything else."""
        self.insert(len(self._children), child)

    def insert(self, index: int, child: Any):
        """Insert a child at a drawing position."""
        if child in self:
            raise DuplicateChildError(f"{child!r} is already on the canvas")
        self._children.insert(index, child)

    def remove(self, child: Any):
        """Remove a child; raises ValueError if it is not present."""
        del self._children[self.index_of(child)]

    def discard(self, child: Any) -> bool:
        """Remove a child if present."""
        if child in self:
            self.remove(child)
            return True
        return False

    def remove_all(self, children: List[Any]):
        """Remove every listed child that is present."""
        for child in children:
            self.discard(child)

    def clear(self):
        self._children.clear()


__all__ = [
    "DuplicateChildError",
    "VertexMarker",
    "EdgeLine",
    "CanvasModel",
]
