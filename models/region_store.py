"""
Region Store.

Ordered collection of committed target regions. Store order is the
stacking order: later regions are drawn on top. The store is paired
with the canvas model and keeps the committed regions in the same
relative order on both at all times.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from .canvas import CanvasModel
from .target_region import TargetRegion

logger = logging.getLogger(__name__)


class RegionStore:
    """
    Committed regions in z-order, synchronized with a canvas.

    Only committed regions are members. The internal list is never handed
    out; use the operations below to change it.
    """

    def __init__(self, canvas: Optional[CanvasModel] = None):
        self._regions: List[TargetRegion] = []
        self._canvas = canvas if canvas is not None else CanvasModel()

    @property
    def canvas(self) -> CanvasModel:
        return self._canvas

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[TargetRegion]:
        return iter(list(self._regions))

    def __contains__(self, region: Any) -> bool:
        return any(r is region for r in self._regions)

    def regions(self) -> List[TargetRegion]:
        """A copy of the committed regions, bottom to top."""
        return list(self._regions)

    def index_of(self, region: TargetRegion) -> int:
        for i, r in enumerate(self._regions):
            if r is region:
                return i
        raise ValueError(f"{region!r} is not in the store")

    def get(self, region_id: str) -> Optional[TargetRegion]:
        """Find a committed region by its ID."""
        for r in self._regions:
            if r.id == region_id:
                return r
        return None

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(self, region: TargetRegion):
        """
        Commit a region on top of the stack.

        A candidate region is usually already on the canvas; it is only
        added there when missing.
        """
        if region in self:
            logger.warning(f"Region {region.id} is already committed")
            return
        if region not in self._canvas:
            self._canvas.add(region)
        self._regions.append(region)
        logger.debug(f"Committed {region.region_type.value} region {region.id}")

    def remove(self, region: TargetRegion) -> bool:
        """Remove a committed region from the store and the canvas."""
        if region not in self:
            return False
        del self._regions[self.index_of(region)]
        self._canvas.discard(region)
        logger.debug(f"Removed region {region.id}")
        return True

    def bring_forward(self, region: TargetRegion) -> bool:
        """Swap a region with the one directly above it (no-op at the top)."""
        index = self.index_of(region)
        if index >= len(self._regions) - 1:
            return False
        self._swap(index, index + 1)
        return True

    def send_backward(self, region: TargetRegion) -> bool:
        """Swap a region with the one directly below it (no-op at the bottom)."""
        index = self.index_of(region)
        if index <= 0:
            return False
        self._swap(index - 1, index)
        return True

    def _swap(self, lower: int, upper: int):
        """
        Swap two neighbouring regions on both the store and the canvas.

        Both canvas children are removed before either is reinserted so
        that neither is ever present twice.
        """
        bottom = self._regions[lower]
        top = self._regions[upper]

        bottom_pos = self._canvas.index_of(bottom)
        top_pos = self._canvas.index_of(top)
        self._canvas.remove(top)
        self._canvas.remove(bottom)
        self._canvas.insert(bottom_pos, top)
        self._canvas.insert(top_pos, bottom)

        self._regions[lower], self._regions[upper] = top, bottom

    def clear(self):
        """Remove every committed region."""
        for region in list(self._regions):
            self._canvas.discard(region)
        self._regions.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    def is_synchronized(self) -> bool:
        """True when committed regions appear on the canvas in store order."""
        on_canvas = [c for c in self._canvas.children if c in self]
        return (len(on_canvas) == len(self._regions) and
                all(a is b for a, b in zip(on_canvas, self._regions)))

    def topmost_at(self, x: float, y: float) -> Optional[TargetRegion]:
        """The highest committed region whose outline contains (x, y)."""
        for region in reversed(self._regions):
            if region.contains(x, y):
                return region
        return None

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Committed regions as dictionaries, in store order."""
        return [r.to_dict() for r in self._regions]


__all__ = ["RegionStore"]
