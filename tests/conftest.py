"""Shared fixtures: synthetic letterboxed images."""

import cv2
import numpy as np
import pytest

# Content block inside a 120x100 black canvas
CANVAS_W, CANVAS_H = 120, 100
CONTENT_TOP, CONTENT_BOTTOM = 20, 80
CONTENT_LEFT, CONTENT_RIGHT = 30, 90


def make_letterboxed(width=CANVAS_W, height=CANVAS_H,
                     top=CONTENT_TOP, bottom=CONTENT_BOTTOM,
                     left=CONTENT_LEFT, right=CONTENT_RIGHT,
                     square=10, channels=3):
    """Black canvas with a checkerboard content block."""
    rows = np.arange(bottom - top)[:, None] // square
    cols = np.arange(right - left)[None, :] // square
    checker = (((rows + cols) % 2) * 255).astype(np.uint8)

    canvas = np.zeros((height, width), dtype=np.uint8)
    canvas[top:bottom, left:right] = checker
    if channels == 3:
        return cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)
    return canvas


@pytest.fixture
def letterboxed_image():
    return make_letterboxed()


@pytest.fixture
def letterboxed_file(tmp_path):
    path = tmp_path / "boxed.png"
    cv2.imwrite(str(path), make_letterboxed())
    return path


@pytest.fixture
def corrupt_file(tmp_path):
    path = tmp_path / "corrupt.png"
    path.write_bytes(b"this is not an image")
    return path
