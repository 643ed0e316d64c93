"""
Tag Binding.

Keeps at most one tag editor open, scoped to a single committed region.
Opening hands the editor a copy of the region's tags; closing writes the
editor's tags back onto the region and drops the editor.
"""

import logging
from typing import Callable, Dict, Optional, Protocol

from models.target_region import TargetRegion

logger = logging.getLogger(__name__)


class TagEditor(Protocol):
    """Editor surface for one tag mapping."""

    def tags(self) -> Dict[str, str]:
        ...

    def close(self):
        ...


TagEditorFactory = Callable[[Dict[str, str]], TagEditor]


class TagBinding:
    """Single open tag editor bound to one region."""

    def __init__(self, editor_factory: TagEditorFactory):
        self._factory = editor_factory
        self._editor: Optional[TagEditor] = None
        self._region: Optional[TargetRegion] = None

    @property
    def is_open(self) -> bool:
        return self._editor is not None

    @property
    def region(self) -> Optional[TargetRegion]:
        """The region the open editor is scoped to."""
        return self._region

    @property
    def editor(self) -> Optional[TagEditor]:
        return self._editor

    def open(self, region: TargetRegion) -> TagEditor:
        """Open an editor for a region, closing any editor already open."""
        if self.is_open:
            self.close()
        self._editor = self._factory(region.tags)
        self._region = region
        logger.debug(f"Tag editor opened for region {region.id}")
        return self._editor

    def close(self) -> bool:
        """Write the editor's tags back onto its region and discard it."""
        if self._editor is None:
            return False
        editor, region = self._editor, self._region
        self._editor = None
        self._region = None
        region.set_tags(editor.tags())
        editor.close()
        logger.debug(f"Tag editor closed for region {region.id}")
        return True


__all__ = [
    "TagEditor",
    "TagEditorFactory",
    "TagBinding",
]
