"""
Pytest configuration and shared fixtures for target editor tests.
"""

import os
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Generator, List, Optional

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.canvas import CanvasModel
from models.region_store import RegionStore
from models.target_region import RectangleRegion, EllipseRegion, PolygonRegion
from services.editor_controller import EditorController
from services.freeform_builder import FreeformBuilder
from services.image_decoder import DecodedImage, ImageDecodeError, UnsupportedImageError, image_extension
from services.settings_manager import EditorDefaults
from services.tag_binding import TagBinding


# ============== Fakes ==============

class FakeAnimation:
    """Frame sequence player that records what the editor asks of it."""

    def __init__(self, frame_count: int = 3):
        self.frame_count = frame_count
        self.cycle_count: Optional[int] = None
        self.on_finished = None
        self.frame_callback = None
        self.play_calls = 0
        self.reset_calls = 0

    def set_cycle_count(self, count: int):
        self.cycle_count = count

    def set_on_finished(self, callback):
        self.on_finished = callback

    def set_frame_callback(self, callback):
        self.frame_callback = callback

    def play(self):
        self.play_calls += 1

    def reset(self):
        self.reset_calls += 1

    def finish(self):
        """Simulate the last cycle completing."""
        if self.on_finished is not None:
            self.on_finished()


class FakeDecoder:
    """Decoder returning canned images, keyed by file path."""

    SUPPORTED_EXTENSIONS = ("gif", "png", "jpg", "jpeg")

    def __init__(self):
        self.images: Dict[str, tuple] = {}
        self.failures: Dict[str, str] = {}
        self.decoded: List[str] = []
        self.animations: List[FakeAnimation] = []

    def add(self, path: str, width: float = 30, height: float = 20, frames: int = 1):
        """Register an image; any frame count other than one gets a player."""
        self.images[path] = (width, height, frames)

    def fail(self, path: str, message: str = "corrupt data"):
        self.failures[path] = message

    def decode(self, path) -> DecodedImage:
        path = str(path)
        self.decoded.append(path)
        if image_extension(path) not in self.SUPPORTED_EXTENSIONS:
            raise UnsupportedImageError(f"Unsupported image extension: {path}")
        if path in self.failures:
            raise ImageDecodeError(self.failures[path])
        if path not in self.images:
            raise FileNotFoundError(path)

        width, height, frames = self.images[path]
        animation = None
        if frames != 1:
            animation = FakeAnimation(frames)
            self.animations.append(animation)
        return DecodedImage(first_frame=f"frame0:{path}", width=width,
                            height=height, animation=animation, path=path)


class FakeTagEditor:
    """Tag editor whose contents tests edit directly."""

    def __init__(self, tags: Dict[str, str]):
        self.initial = dict(tags)
        self.current = dict(tags)
        self.closed = False

    def tags(self) -> Dict[str, str]:
        return dict(self.current)

    def close(self):
        self.closed = True


class FakeTagEditorFactory:
    """Callable factory that keeps every editor it creates."""

    def __init__(self):
        self.editors: List[FakeTagEditor] = []

    def __call__(self, tags: Dict[str, str]) -> FakeTagEditor:
        editor = FakeTagEditor(tags)
        self.editors.append(editor)
        return editor

    @property
    def last(self) -> Optional[FakeTagEditor]:
        return self.editors[-1] if self.editors else None


class SignalRecorder:
    """Collects signal emissions as (name, args) pairs."""

    def __init__(self, controller: EditorController):
        self.events: List[tuple] = []
        for name in ("toolChanged", "modeChanged", "selectionChanged",
                     "controlsEnabledChanged", "colorSynced", "tagEditorToggled",
                     "regionCommitted", "regionRemoved"):
            getattr(controller, name).connect(
                lambda *args, _name=name: self.events.append((_name, args)))

    def of(self, name: str) -> List[tuple]:
        return [args for n, args in self.events if n == name]


# ============== Qt Fixtures ==============

@pytest.fixture(scope="session")
def qapp():
    """Shared QGuiApplication for tests that decode real image files."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt6.QtGui import QGuiApplication
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="target_editor_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# ============== Model Fixtures ==============

@pytest.fixture
def canvas() -> CanvasModel:
    """Create an empty canvas."""
    return CanvasModel()


@pytest.fixture
def store(canvas: CanvasModel) -> RegionStore:
    """Create an empty region store drawing on the canvas fixture."""
    return RegionStore(canvas)


@pytest.fixture
def three_regions(store: RegionStore) -> List:
    """Commit a rectangle, an ellipse and a triangle, bottom to top."""
    regions = [
        RectangleRegion(0, 0, 40, 40),
        EllipseRegion(100, 100, 20, 10),
        PolygonRegion([(200, 220), (240, 220), (220, 200)]),
    ]
    for region in regions:
        store.add(region)
    return regions


# ============== Service Fixtures ==============

@pytest.fixture
def builder(canvas: CanvasModel) -> FreeformBuilder:
    """Create a freeform builder drawing on the canvas fixture."""
    return FreeformBuilder(canvas)


@pytest.fixture
def decoder() -> FakeDecoder:
    """Create a fake image decoder."""
    return FakeDecoder()


@pytest.fixture
def tag_factory() -> FakeTagEditorFactory:
    """Create a fake tag editor factory."""
    return FakeTagEditorFactory()


@pytest.fixture
def defaults() -> EditorDefaults:
    """Default editor settings."""
    return EditorDefaults()


@pytest.fixture
def controller(store, builder, decoder, tag_factory, defaults) -> EditorController:
    """Create a controller wired to the fakes."""
    return EditorController(
        store,
        TagBinding(tag_factory),
        decoder=decoder,
        defaults=defaults,
        builder=builder,
    )


@pytest.fixture
def signals(controller: EditorController) -> SignalRecorder:
    """Record the controller's signals."""
    return SignalRecorder(controller)
