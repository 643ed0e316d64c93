"""Views package."""

from .region_items import create_item, sync_item
from .target_canvas import TargetCanvas, TargetScene, to_key_press
from .tag_editor_panel import TagEditorPanel
from .main_window import TargetEditorWindow, EditorToolbar

__all__ = [
    "create_item",
    "sync_item",
    "TargetCanvas",
    "TargetScene",
    "to_key_press",
    "TagEditorPanel",
    "TargetEditorWindow",
    "EditorToolbar",
]
