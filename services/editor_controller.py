"""
Editor Controller.

The interaction state machine behind the target editor. Views translate
mouse and keyboard input into the entry points below; the controller
decides what it means given the active tool and updates the canvas, the
region store, the freeform builder and the tag binding.

Modes (derived from the active tool):
    IDLE     Cursor tool: select, move, resize, reorder and delete
             committed regions
    PLACING  Shape or image tool: a candidate region follows the pointer
             and a primary click commits it
    TRACING  Freeform tool: primary clicks add vertices, a secondary
             click finalizes the polygon

The candidate (placed but uncommitted) and the selection (committed,
highlighted) are separate slots and are never set at the same time.

Usage:
    controller = EditorController(store, TagBinding(factory), QtImageDecoder())
    controller.initialize(background_image)
    controller.start_shape(Tool.RECTANGLE)
    controller.pointer_moved(120, 80)
    controller.pointer_released(120, 80, PointerButton.PRIMARY)
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from PyQt6.QtCore import QObject, pyqtSignal

from models.interaction import Tool, InteractionMode, PointerButton, Key, KeyPress
from models.region_presets import create_region_for_tool
from models.region_store import RegionStore
from models.target_region import (
    TargetRegion, ImageRegion, is_colorable, create_color, get_color_name,
)
from services.freeform_builder import FreeformBuilder
from services.image_decoder import ImageDecodeError, ImageDecoder
from services.settings_manager import EditorDefaults
from services.tag_binding import TagBinding

logger = logging.getLogger(__name__)


class EditorController(QObject):
    """
    Interaction controller for the target editor.

    Signals:
        toolChanged(Tool): Active tool changed (views update the tool buttons)
        modeChanged(InteractionMode): Mode changed
        selectionChanged(object): New selection, or None; views focus it
        controlsEnabledChanged(bool): Reorder/tag/color controls enabled
        colorSynced(str): Color chooser should show this name
        tagEditorToggled(bool): Tag editor opened (True) or closed (False)
        regionCommitted(object): Region joined the store
        regionRemoved(object): Region left the store
        canvasChanged(): Canvas children or region geometry changed
    """

    toolChanged = pyqtSignal(object)
    modeChanged = pyqtSignal(object)
    selectionChanged = pyqtSignal(object)
    controlsEnabledChanged = pyqtSignal(bool)
    colorSynced = pyqtSignal(str)
    tagEditorToggled = pyqtSignal(bool)
    regionCommitted = pyqtSignal(object)
    regionRemoved = pyqtSignal(object)
    canvasChanged = pyqtSignal()

    def __init__(self, store: RegionStore, tag_binding: TagBinding,
                 decoder: Optional[ImageDecoder] = None,
                 defaults: Optional[EditorDefaults] = None,
                 builder: Optional[FreeformBuilder] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._defaults = defaults or EditorDefaults()
        self._store = store
        self._canvas = store.canvas
        self._tags = tag_binding
        self._decoder = decoder
        self._builder = builder or FreeformBuilder(
            self._canvas,
            vertex_radius=self._defaults.vertex_radius,
            dash_offset=self._defaults.preview_dash,
        )

        self._tool = Tool.CURSOR
        self._candidate: Optional[TargetRegion] = None
        self._selection: Optional[TargetRegion] = None
        self._controls_enabled = False
        self._pointer: Tuple[float, float] = (0.0, 0.0)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def store(self) -> RegionStore:
        return self._store

    @property
    def canvas(self):
        return self._canvas

    @property
    def builder(self) -> FreeformBuilder:
        return self._builder

    @property
    def tag_binding(self) -> TagBinding:
        return self._tags

    @property
    def defaults(self) -> EditorDefaults:
        return self._defaults

    @property
    def background(self) -> Any:
        return self._canvas.background

    @property
    def active_tool(self) -> Tool:
        return self._tool

    @property
    def mode(self) -> InteractionMode:
        return self._mode_for(self._tool)

    @property
    def candidate(self) -> Optional[TargetRegion]:
        """Region on the canvas that has not been committed yet."""
        return self._candidate

    @property
    def selection(self) -> Optional[TargetRegion]:
        """Selected committed region."""
        return self._selection

    @property
    def controls_enabled(self) -> bool:
        return self._controls_enabled

    @property
    def pointer(self) -> Tuple[float, float]:
        """Last known pointer position."""
        return self._pointer

    def committed_regions(self) -> List[Dict[str, Any]]:
        """The committed region sequence as dictionaries, bottom to top."""
        return self._store.to_dicts()

    @staticmethod
    def _mode_for(tool: Tool) -> InteractionMode:
        if tool == Tool.CURSOR:
            return InteractionMode.IDLE
        if tool == Tool.FREEFORM:
            return InteractionMode.TRACING
        return InteractionMode.PLACING

    def _is_committed(self, region: Optional[TargetRegion]) -> bool:
        return region is not None and region in self._store

    # =========================================================================
    # Commands
    # =========================================================================

    def initialize(self, background: Any):
        """Set the background image drawn beneath all regions."""
        self._canvas.background = background
        self.canvasChanged.emit()

    def select_cursor_tool(self):
        """Switch to the cursor tool, dropping any uncommitted work."""
        self._builder.reset()
        self._discard_candidate()
        self._set_tool(Tool.CURSOR)
        self.canvasChanged.emit()

    def start_shape(self, tool: Tool):
        """Activate a shape tool and put a candidate under the pointer."""
        if tool == Tool.CURSOR:
            self.select_cursor_tool()
            return
        if tool == Tool.FREEFORM:
            self.start_freeform()
            return

        self._builder.reset()
        self._discard_candidate()
        self._release_selection()
        self._set_tool(tool)
        self._spawn_candidate(*self._pointer)
        self.canvasChanged.emit()

    def start_freeform(self):
        """Activate the freeform tool with an empty trace."""
        self._builder.reset()
        self._discard_candidate()
        self._release_selection()
        self._set_tool(Tool.FREEFORM)
        self.canvasChanged.emit()

    def open_image(self, path: Optional[Union[str, Path]]) -> Optional[ImageRegion]:
        """
        Load an image as the candidate region.

        A missing path, an unsupported extension or a decode failure
        produces no region and leaves the editor untouched.
        """
        if not path:
            return None

        region = self._load_image(path, *self._pointer)
        if region is None:
            return None

        self._builder.reset()
        self._discard_candidate()
        self._release_selection()
        self._set_tool(Tool.IMAGE)
        self._canvas.add(region)
        self._candidate = region
        self.canvasChanged.emit()
        return region

    def bring_forward(self) -> bool:
        """Move the selection one step up the stacking order."""
        if not self._is_committed(self._selection):
            return False
        moved = self._store.bring_forward(self._selection)
        if moved:
            self.canvasChanged.emit()
        return moved

    def send_backward(self) -> bool:
        """Move the selection one step down the stacking order."""
        if not self._is_committed(self._selection):
            return False
        moved = self._store.send_backward(self._selection)
        if moved:
            self.canvasChanged.emit()
        return moved

    def toggle_tag_editor(self, checked: bool) -> bool:
        """Open or close the tag editor for the selection."""
        if not self._is_committed(self._selection):
            return False

        if checked and not self._tags.is_open:
            self._open_tag_editor()
        elif not checked and self._tags.is_open:
            self._close_tag_editor()
        return True

    def set_fill_color(self, name: str) -> bool:
        """Apply a color chooser name to the selection."""
        region = self._selection
        if not self._is_committed(region) or not is_colorable(region):
            return False
        region.set_fill(create_color(name))
        self.canvasChanged.emit()
        return True

    # =========================================================================
    # Pointer and keyboard events
    # =========================================================================

    def pointer_moved(self, x: float, y: float):
        """Track the pointer: update the preview edge or drag the candidate."""
        self._pointer = (x, y)

        if self._tool == Tool.FREEFORM:
            if self._builder.vertices:
                self._builder.preview_edge(x, y)
                self.canvasChanged.emit()
            return

        if self._candidate is None or self._tool == Tool.CURSOR:
            return

        # Center on the pointer without pushing the origin off the canvas
        _, _, width, height = self._candidate.bounds()
        self._candidate.move_to(max(0.0, x - width / 2), max(0.0, y - height / 2))
        self.canvasChanged.emit()

    def pointer_released(self, x: float, y: float,
                         button: PointerButton = PointerButton.PRIMARY):
        """Handle a click on the canvas (or a region while not in cursor mode)."""
        self._pointer = (x, y)

        if self._tool == Tool.FREEFORM:
            if button == PointerButton.PRIMARY:
                self._builder.add_vertex(x, y)
                self.canvasChanged.emit()
            elif button == PointerButton.SECONDARY:
                self._finish_freeform()
            return

        if self._tool == Tool.CURSOR or button != PointerButton.PRIMARY:
            return

        if self._candidate is None:
            logger.error(f"No region to place for tool {self._tool.name}")
            return

        self._commit_candidate()

    def canvas_key_pressed(self, press: KeyPress) -> bool:
        """Canvas-wide shortcuts; returns True if the key was handled."""
        if self._tool == Tool.FREEFORM and press.ctrl and press.key == Key.Z:
            if self._builder.undo():
                self.canvasChanged.emit()
            return True
        return False

    def region_clicked(self, region: TargetRegion, x: float, y: float,
                       button: PointerButton = PointerButton.PRIMARY):
        """A click landed on a region."""
        if self._tool != Tool.CURSOR:
            # Placing or tracing over an existing region
            self.pointer_released(x, y, button)
            return

        if not self._is_committed(region):
            return

        self._select(region)

    def region_key_pressed(self, region: TargetRegion, press: KeyPress) -> bool:
        """Keys on the focused (selected) region; returns True if handled."""
        if region is not self._selection or not self._is_committed(region):
            return False

        move = self._defaults.movement_delta
        scale = self._defaults.scale_delta
        key = press.key

        if key == Key.DELETE:
            self._delete(region)
        elif key == Key.LEFT:
            if press.shift:
                region.resize_width(-scale)
            else:
                region.move_by(-move, 0)
        elif key == Key.RIGHT:
            if press.shift:
                region.resize_width(scale)
            else:
                region.move_by(move, 0)
        elif key == Key.UP:
            if press.shift:
                region.resize_height(-scale)
            else:
                region.move_by(0, -move)
        elif key == Key.DOWN:
            if press.shift:
                region.resize_height(scale)
            else:
                region.move_by(0, move)
        else:
            return False

        self.canvasChanged.emit()
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_tool(self, tool: Tool):
        if tool == self._tool:
            return
        old_mode = self.mode
        self._tool = tool
        logger.debug(f"Tool changed to {tool.name}")
        self.toolChanged.emit(tool)
        if self.mode != old_mode:
            logger.debug(f"Mode {old_mode.value} -> {self.mode.value}")
            self.modeChanged.emit(self.mode)

    def _set_controls_enabled(self, enabled: bool):
        if enabled == self._controls_enabled:
            return
        self._controls_enabled = enabled
        self.controlsEnabledChanged.emit(enabled)

    def _spawn_candidate(self, x: float, y: float) -> Optional[TargetRegion]:
        """Create the active tool's preset region on the canvas."""
        d = self._defaults
        region = create_region_for_tool(
            self._tool, x, y,
            fill=create_color(d.default_fill),
            opacity=d.default_opacity,
            default_dim=d.default_dim,
            scale=d.silhouette_scale,
        )
        if region is None:
            self._candidate = None
            logger.error(f"Unimplemented region type selected: {self._tool.name}")
            return None

        self._canvas.add(region)
        self._candidate = region
        return region

    def _discard_candidate(self):
        """Remove an uncommitted candidate from the canvas."""
        region = self._candidate
        self._candidate = None
        if region is not None and region not in self._store:
            self._canvas.discard(region)

    def _release_selection(self):
        """Unhighlight and drop the selection, closing its tag editor."""
        if self._selection is None:
            return
        if self._tags.is_open:
            self._close_tag_editor()
        self._selection.set_selected(False)
        self._selection = None
        self.selectionChanged.emit(None)
        self._set_controls_enabled(False)

    def _commit_candidate(self):
        """Commit the candidate and stamp a fresh one in its place."""
        region = self._candidate
        self._candidate = None
        if region in self._store:
            return

        self._store.add(region)
        self.regionCommitted.emit(region)

        left, top, _, _ = region.bounds()
        if isinstance(region, ImageRegion):
            self._play_once(region)
            stamp = self._load_image(region.image_file, left, top)
            if stamp is not None:
                self._canvas.add(stamp)
                self._candidate = stamp
        else:
            stamp = self._spawn_candidate(*self._pointer)
            if stamp is not None:
                stamp.move_to(left, top)

        self.canvasChanged.emit()

    def _play_once(self, region: ImageRegion):
        """Play a newly placed image's frames once, then rewind and detach."""
        animation = region.animation
        if animation is None:
            return

        def on_finished():
            animation.reset()
            animation.set_on_finished(None)

        animation.set_cycle_count(1)
        animation.set_on_finished(on_finished)
        animation.play()

    def _finish_freeform(self):
        """Finalize the trace, commit the polygon and return to the cursor."""
        d = self._defaults
        polygon = self._builder.finalize(
            fill=create_color(d.default_fill),
            opacity=d.default_opacity,
        )
        if polygon is not None:
            self._store.add(polygon)
            self.regionCommitted.emit(polygon)
        self._set_tool(Tool.CURSOR)
        self.canvasChanged.emit()

    def _load_image(self, path: Union[str, Path], x: float, y: float) -> Optional[ImageRegion]:
        """Decode an image into a region at (x, y); None on any failure."""
        if self._decoder is None:
            logger.warning("No image decoder configured")
            return None

        try:
            decoded = self._decoder.decode(path)
        except (ImageDecodeError, OSError) as e:
            logger.warning(f"Image not loaded: {e}")
            return None

        region = ImageRegion(x, y, str(path), decoded.width, decoded.height)
        region.set_image(decoded.first_frame)

        animation = decoded.animation
        if animation is not None:
            if animation.frame_count > 0:
                def show_frame(image, region=region):
                    region.set_image(image)
                    self.canvasChanged.emit()

                animation.set_frame_callback(show_frame)
                region.set_animation(animation)
            else:
                logger.warning(f"Ignoring empty frame sequence in {path}")

        return region

    def _select(self, region: TargetRegion):
        """Make a committed region the selection."""
        previous = self._selection
        reopen_tags = False

        if previous is not None and previous is not region:
            previous.set_selected(False)
            if self._tags.is_open:
                self._close_tag_editor()
                reopen_tags = True

        region.set_selected(True)
        self._selection = region
        self.selectionChanged.emit(region)
        self._set_controls_enabled(True)
        if is_colorable(region):
            self.colorSynced.emit(get_color_name(region.fill))

        if reopen_tags:
            self._open_tag_editor()

        logger.debug(f"Selected region {region.id}")
        self.canvasChanged.emit()

    def _delete(self, region: TargetRegion):
        """Remove the selected region from the store and the canvas."""
        if self._tags.is_open:
            self._close_tag_editor()
        self._store.remove(region)
        self._selection = None
        self.selectionChanged.emit(None)
        self._set_controls_enabled(False)
        self.regionRemoved.emit(region)

    def _open_tag_editor(self):
        self._tags.open(self._selection)
        self.tagEditorToggled.emit(True)

    def _close_tag_editor(self):
        self._tags.close()
        self.tagEditorToggled.emit(False)


__all__ = ["EditorController"]
