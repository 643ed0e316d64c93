"""
Image Decoder Service.

Loads bitmap files for image regions using Qt's image readers and plays
multi-frame sources (animated GIFs) frame by frame on the Qt event loop.

Usage:
    decoder = QtImageDecoder()
    decoded = decoder.decode("targets/popper.gif")
    decoded.first_frame      # QImage
    decoded.animation        # FrameAnimation or None for still images
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtGui import QImage, QImageReader

logger = logging.getLogger(__name__)

DEFAULT_FRAME_DELAY_MS = 100


class ImageDecodeError(Exception):
    """Raised when an image file cannot be decoded."""


class UnsupportedImageError(ImageDecodeError):
    """Raised when no decoder handles the file's extension."""


def image_extension(path: Union[str, Path]) -> str:
    """
    Extension used to pick a decoder: everything after the first '.' in
    the file name, lower-cased ("target.tar.gif" -> "tar.gif").
    """
    name = Path(path).name
    dot = name.find('.')
    if dot < 0:
        return ""
    return name[dot + 1:].lower()


# =============================================================================
# Frame Sequence Player
# =============================================================================

class FrameAnimation(QObject):
    """
    Plays a decoded frame sequence.

    Each frame change is pushed to the frame callback (usually the owning
    region's ``set_image``). With a cycle count of N > 0 playback stops
    after N passes and the finished callback runs once; 0 loops forever.

    Signals:
        frameChanged(int): Emitted with the new frame index
        finished(): Emitted when the last cycle completes
    """

    frameChanged = pyqtSignal(int)
    finished = pyqtSignal()

    def __init__(self, frames: List[QImage], delays: Optional[List[int]] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._frames = list(frames)
        self._delays = list(delays) if delays else []
        self._index = 0
        self._cycle_count = 0
        self._cycles_done = 0
        self._on_finished: Optional[Callable[[], None]] = None
        self._on_frame: Optional[Callable[[Any], None]] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._advance)

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def first_frame(self) -> Optional[QImage]:
        return self._frames[0] if self._frames else None

    def set_cycle_count(self, count: int):
        """Number of passes through the frames (0 = loop forever)."""
        self._cycle_count = max(0, count)

    def set_on_finished(self, callback: Optional[Callable[[], None]]):
        """Set or clear the callback run when playback finishes."""
        self._on_finished = callback

    def set_frame_callback(self, callback: Optional[Callable[[Any], None]]):
        self._on_frame = callback

    def play(self):
        if not self._frames or self.is_running:
            return
        self._cycles_done = 0
        self._show(self._index)
        self._schedule()

    def stop(self):
        self._timer.stop()

    def reset(self):
        """Stop and show the first frame."""
        self._timer.stop()
        self._index = 0
        if self._frames:
            self._show(0)

    def _delay(self, index: int) -> int:
        if index < len(self._delays) and self._delays[index] > 0:
            return self._delays[index]
        return DEFAULT_FRAME_DELAY_MS

    def _schedule(self):
        self._timer.start(self._delay(self._index))

    def _show(self, index: int):
        self._index = index
        if self._on_frame is not None:
            self._on_frame(self._frames[index])
        self.frameChanged.emit(index)

    def _advance(self):
        next_index = self._index + 1
        if next_index >= len(self._frames):
            self._cycles_done += 1
            if self._cycle_count and self._cycles_done >= self._cycle_count:
                self.finished.emit()
                if self._on_finished is not None:
                    self._on_finished()
                return
            next_index = 0
        self._show(next_index)
        self._schedule()


# =============================================================================
# Decoder
# =============================================================================

@dataclass
class DecodedImage:
    """Result of decoding an image file."""
    first_frame: Any
    width: float
    height: float
    animation: Optional[Any] = None
    path: str = ""


class ImageDecoder(Protocol):
    """Decoder collaborator used by the editor controller."""

    def decode(self, path: Union[str, Path]) -> DecodedImage:
        ...


class QtImageDecoder:
    """Decodes still and animated images with QImageReader."""

    SUPPORTED_EXTENSIONS = ("gif", "png", "jpg", "jpeg")

    def __init__(self, max_frames: int = 500):
        self.max_frames = max_frames
        self.extensions = self.SUPPORTED_EXTENSIONS

    def supports(self, path: Union[str, Path]) -> bool:
        return image_extension(path) in self.extensions

    def decode(self, path: Union[str, Path]) -> DecodedImage:
        """
        Decode an image file.

        Raises:
            UnsupportedImageError: The extension has no decoder
            ImageDecodeError: The file could not be read
        """
        extension = image_extension(path)
        if extension not in self.extensions:
            raise UnsupportedImageError(f"Unsupported image extension '{extension}': {path}")

        reader = QImageReader(str(path))
        if not reader.canRead():
            raise ImageDecodeError(f"Cannot read {path}: {reader.errorString()}")

        frames: List[QImage] = []
        delays: List[int] = []
        while len(frames) < self.max_frames:
            image = reader.read()
            if image.isNull():
                break
            frames.append(image)
            delays.append(reader.nextImageDelay())
            if not reader.supportsAnimation() or not reader.canRead():
                break
        else:
            logger.warning(f"Stopped decoding {path} at {self.max_frames} frames")

        if not frames:
            raise ImageDecodeError(f"No frames decoded from {path}: {reader.errorString()}")

        first = frames[0]
        animation = FrameAnimation(frames, delays) if len(frames) > 1 else None
        logger.debug(f"Decoded {path}: {first.width()}x{first.height()}, {len(frames)} frame(s)")

        return DecodedImage(
            first_frame=first,
            width=float(first.width()),
            height=float(first.height()),
            animation=animation,
            path=str(path),
        )


__all__ = [
    "DEFAULT_FRAME_DELAY_MS",
    "ImageDecodeError",
    "UnsupportedImageError",
    "image_extension",
    "FrameAnimation",
    "DecodedImage",
    "ImageDecoder",
    "QtImageDecoder",
]
