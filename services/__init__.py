"""Services package."""

from .settings_manager import (
    SettingsManager,
    AppSettings,
    EditorDefaults,
    UISettings,
    PathSettings,
    get_settings,
    reset_settings_manager,
)
from .freeform_builder import (
    FreeformBuilder,
    VERTEX_RADIUS,
    DASH_OFFSET,
    MIN_POLYGON_VERTICES,
)
from .tag_binding import TagBinding, TagEditor, TagEditorFactory
from .image_decoder import (
    ImageDecodeError,
    UnsupportedImageError,
    image_extension,
    FrameAnimation,
    DecodedImage,
    ImageDecoder,
    QtImageDecoder,
)
from .editor_controller import EditorController

__all__ = [
    "SettingsManager",
    "AppSettings",
    "EditorDefaults",
    "UISettings",
    "PathSettings",
    "get_settings",
    "reset_settings_manager",
    "FreeformBuilder",
    "VERTEX_RADIUS",
    "DASH_OFFSET",
    "MIN_POLYGON_VERTICES",
    "TagBinding",
    "TagEditor",
    "TagEditorFactory",
    "ImageDecodeError",
    "UnsupportedImageError",
    "image_extension",
    "FrameAnimation",
    "DecodedImage",
    "ImageDecoder",
    "QtImageDecoder",
    "EditorController",
]
