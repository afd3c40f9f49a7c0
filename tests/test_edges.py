"""Tests for the Canny edge map provider."""

import cv2
import numpy as np
import pytest
from PIL import Image

from conftest import (
    CANVAS_H,
    CANVAS_W,
    CONTENT_BOTTOM,
    CONTENT_LEFT,
    CONTENT_RIGHT,
    CONTENT_TOP,
    make_letterboxed,
)
from debox.edges import detect_edges, image_size, load_edge_grid, read_image, save_edge_map
from debox.errors import EdgeDetectionFailure
from debox.scan import scan


class TestDetectEdges:
    """Tests for detect_edges on in-memory arrays."""

    def test_shape_and_dtype_match_image(self, letterboxed_image):
        grid = detect_edges(letterboxed_image)

        assert grid.shape == (CANVAS_H, CANVAS_W)
        assert grid.dtype == bool

    def test_uniform_image_has_no_edges(self):
        image = np.full((40, 60, 3), 128, dtype=np.uint8)

        assert not detect_edges(image).any()

    def test_bars_are_edge_free(self, letterboxed_image):
        grid = detect_edges(letterboxed_image)

        assert not grid[:CONTENT_TOP - 3].any()
        assert not grid[CONTENT_BOTTOM + 3:].any()
        assert not grid[:, :CONTENT_LEFT - 3].any()
        assert not grid[:, CONTENT_RIGHT + 3:].any()
        assert grid[CONTENT_TOP:CONTENT_BOTTOM, CONTENT_LEFT:CONTENT_RIGHT].any()

    def test_scan_finds_content_block(self, letterboxed_image):
        offsets = scan(detect_edges(letterboxed_image), CANVAS_W, CANVAS_H)

        assert CONTENT_TOP - 5 <= offsets.top <= CONTENT_TOP
        assert CONTENT_BOTTOM - 1 <= offsets.bottom <= CONTENT_BOTTOM + 5
        assert CONTENT_LEFT - 5 <= offsets.left <= CONTENT_LEFT
        assert CONTENT_RIGHT - 1 <= offsets.right <= CONTENT_RIGHT + 5

    def test_grayscale_and_bgra_inputs(self):
        gray = make_letterboxed(channels=1)
        bgra = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGRA)

        assert np.array_equal(detect_edges(gray), detect_edges(bgra))

    def test_16bit_input(self):
        gray16 = make_letterboxed(channels=1).astype(np.uint16) * 257

        grid = detect_edges(gray16)

        assert grid.shape == (CANVAS_H, CANVAS_W)
        assert grid.any()

    def test_radius_zero_skips_smoothing(self, letterboxed_image):
        grid = detect_edges(letterboxed_image, {'radius': 0})

        assert grid.shape == (CANVAS_H, CANVAS_W)

    def test_empty_image(self):
        with pytest.raises(EdgeDetectionFailure):
            detect_edges(np.zeros((0, 0), dtype=np.uint8))

    def test_invalid_params(self, letterboxed_image):
        with pytest.raises(ValueError):
            detect_edges(letterboxed_image, {'low_percent': 50, 'high_percent': 10})

    def test_unknown_param(self, letterboxed_image):
        with pytest.raises(ValueError):
            detect_edges(letterboxed_image, {'threshold': 3})


class TestFileHelpers:
    """Tests for file based helpers."""

    def test_image_size(self, letterboxed_file):
        assert image_size(str(letterboxed_file)) == (CANVAS_W, CANVAS_H)

    def test_image_size_corrupt(self, corrupt_file):
        with pytest.raises(EdgeDetectionFailure):
            image_size(str(corrupt_file))

    def test_image_size_missing(self, tmp_path):
        with pytest.raises(EdgeDetectionFailure):
            image_size(str(tmp_path / "missing.png"))

    def test_read_image_corrupt(self, corrupt_file):
        with pytest.raises(EdgeDetectionFailure):
            read_image(str(corrupt_file))

    def test_load_edge_grid(self, letterboxed_file):
        img, grid = load_edge_grid(str(letterboxed_file))

        assert img.shape[:2] == grid.shape == (CANVAS_H, CANVAS_W)

    def test_save_edge_map(self, tmp_path, letterboxed_image):
        grid = detect_edges(letterboxed_image)
        out = tmp_path / "edges" / "map.png"

        save_edge_map(grid, str(out))

        saved = cv2.imread(str(out), cv2.IMREAD_GRAYSCALE)
        assert np.array_equal(saved > 0, grid)

    def test_save_edge_map_unknown_extension(self, tmp_path, letterboxed_image):
        with pytest.raises(EdgeDetectionFailure):
            save_edge_map(detect_edges(letterboxed_image), str(tmp_path / "map.unknownext"))

    def test_save_edge_map_parent_is_file(self, tmp_path, letterboxed_image):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")

        with pytest.raises(EdgeDetectionFailure):
            save_edge_map(detect_edges(letterboxed_image), str(blocker / "map.png"))

    def test_image_size_too_large(self, monkeypatch, letterboxed_file):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(EdgeDetectionFailure):
            image_size(str(letterboxed_file))
