"""
Unit tests for image decoding helpers.

Tests:
- Extension extraction used to pick a decoder
- Rejection of unsupported files
- Decoding still, animated and corrupt files
- Frame sequence bookkeeping
"""

import logging

import pytest
from PyQt6.QtGui import QImage
from services.image_decoder import (
    FrameAnimation, ImageDecodeError, QtImageDecoder, UnsupportedImageError,
    image_extension,
)


class TestImageExtension:
    """Tests for image_extension."""

    @pytest.mark.parametrize("path,expected", [
        ("popper.gif", "gif"),
        ("Popper.PNG", "png"),
        ("/targets/v1.2/plate.jpg", "jpg"),
        ("a.tar.gif", "tar.gif"),
        ("noextension", ""),
        ("trailing.", ""),
    ])
    def test_extension(self, path, expected):
        """Test the substring after the first dot of the file name."""
        assert image_extension(path) == expected


class TestQtImageDecoder:
    """Tests for QtImageDecoder."""

    def test_supports(self):
        """Test supported extensions."""
        decoder = QtImageDecoder()
        assert decoder.supports("a.gif")
        assert decoder.supports("a.JPEG")
        assert not decoder.supports("a.bmp")
        assert not decoder.supports("a.tar.gif")

    def test_unsupported_extension_raises(self, temp_dir):
        """Test unsupported files are rejected before reading."""
        with pytest.raises(UnsupportedImageError):
            QtImageDecoder().decode(temp_dir / "target.svg")

    def test_unsupported_is_decode_error(self):
        """Test callers can catch one exception type."""
        assert issubclass(UnsupportedImageError, ImageDecodeError)


def _gif_frame() -> bytes:
    # Graphic control extension (100 ms delay) + 1x1 image of colour 0
    return (b"\x21\xf9\x04\x00\x0a\x00\x00\x00"
            b"\x2c\x00\x00\x00\x00\x01\x00\x01\x00\x00"
            b"\x02\x02\x44\x01\x00")


def write_gif(path, frames: int = 2):
    """Write a 1x1 GIF with the given number of frames."""
    data = (b"GIF89a\x01\x00\x01\x00\x80\x00\x00"
            b"\xff\xff\xff\x00\x00\x00"
            b"\x21\xff\x0bNETSCAPE2.0\x03\x01\x00\x00\x00")
    data += _gif_frame() * frames + b"\x3b"
    path.write_bytes(data)
    return path


def write_png(path, width: int = 4, height: int = 3):
    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(0xFF0000)
    assert image.save(str(path))
    return path


class TestQtImageDecoderFiles:
    """Tests for QtImageDecoder on files written to disk."""

    def test_still_png(self, qapp, temp_dir):
        """Test a still image decodes to one frame without a player."""
        path = write_png(temp_dir / "plate.png")
        decoded = QtImageDecoder().decode(path)

        assert decoded.width == 4
        assert decoded.height == 3
        assert decoded.first_frame.width() == 4
        assert decoded.animation is None
        assert decoded.path == str(path)

    def test_animated_gif(self, qapp, temp_dir):
        """Test every frame of an animated GIF is collected."""
        path = write_gif(temp_dir / "popper.gif", frames=2)
        decoded = QtImageDecoder().decode(path)

        assert (decoded.width, decoded.height) == (1, 1)
        assert isinstance(decoded.animation, FrameAnimation)
        assert decoded.animation.frame_count == 2

    def test_frame_cap(self, qapp, temp_dir, caplog):
        """Test decoding stops at max_frames and says so."""
        path = write_gif(temp_dir / "popper.gif", frames=2)
        with caplog.at_level(logging.WARNING):
            decoded = QtImageDecoder(max_frames=1).decode(path)

        assert decoded.animation is None
        assert "Stopped decoding" in caplog.text

    def test_corrupt_gif(self, qapp, temp_dir):
        """Test unreadable data raises ImageDecodeError."""
        path = temp_dir / "broken.gif"
        path.write_bytes(b"this is not an image")
        with pytest.raises(ImageDecodeError):
            QtImageDecoder().decode(path)

    def test_missing_file(self, qapp, temp_dir):
        """Test a missing file is a decode error."""
        with pytest.raises(ImageDecodeError):
            QtImageDecoder().decode(temp_dir / "missing.png")


class TestFrameAnimation:
    """Tests for FrameAnimation without a running event loop."""

    def test_first_frame(self):
        """Test frame access."""
        animation = FrameAnimation(["f0", "f1", "f2"])
        assert animation.frame_count == 3
        assert animation.first_frame() == "f0"
        assert FrameAnimation([]).first_frame() is None

    def test_reset_shows_first_frame(self):
        """Test reset pushes frame zero to the callback."""
        shown = []
        animation = FrameAnimation(["f0", "f1"])
        animation.set_frame_callback(shown.append)
        animation.reset()
        assert shown == ["f0"]
        assert animation.current_index == 0

    def test_last_cycle_runs_finished_callback(self):
        """Test the finished callback after the final frame of the last cycle."""
        finished = []
        animation = FrameAnimation(["f0", "f1"])
        animation.set_cycle_count(1)
        animation.set_on_finished(lambda: finished.append(True))
        animation._index = 1
        animation._advance()
        assert finished == [True]

    def test_clear_finished_callback(self):
        """Test detaching the finished callback."""
        finished = []
        animation = FrameAnimation(["f0", "f1"])
        animation.set_cycle_count(1)
        animation.set_on_finished(lambda: finished.append(True))
        animation.set_on_finished(None)
        animation._index = 1
        animation._advance()
        assert finished == []
