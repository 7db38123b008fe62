"""Frame and scan parameters of an image, and its Y/Cb/Cr sample planes."""

from __future__ import annotations

import logging
import math
from typing import List

from jpegenc.bitmap import Image
from jpegenc.quantize import BLOCK_SIZE, _f32

logger = logging.getLogger(__name__)

NUMBER_OF_COMPONENTS = 3
DEFAULT_COMMENT = "pjpegenc"

Plane = List[List[float]]


def _padded(size: int) -> int:
    """Round ``size`` up to a whole number of blocks."""
    if size % BLOCK_SIZE:
        return math.ceil(size / BLOCK_SIZE) * BLOCK_SIZE
    return size


class JpegInfo:
    """Default JPEG parameters for an image and its colour planes.

    ``components`` holds the Y, Cb and Cr planes as rows of single-precision
    samples. Each plane is ``comp_height[i]`` rows of ``comp_width[i]``
    values; samples past the image's right and bottom edges are zero.
    """

    def __init__(self, image: Image) -> None:
        self.image = image
        self.image_width = image.width
        self.image_height = image.height
        self.comment = DEFAULT_COMMENT
        logger.debug("Image size: %d x %d", self.image_width, self.image_height)

        self.precision = 8
        self.comp_id = [1, 2, 3]
        self.hsamp_factor = [1, 1, 1]
        self.vsamp_factor = [1, 1, 1]
        self.qtable_number = [0, 1, 1]
        self.dc_table_number = [0, 1, 1]
        self.ac_table_number = [0, 1, 1]
        self.last_column_is_dummy = [False] * NUMBER_OF_COMPONENTS
        self.last_row_is_dummy = [False] * NUMBER_OF_COMPONENTS

        self.ss = 0
        self.se = 63
        self.ah = 0
        self.al = 0

        self.comp_width = [0] * NUMBER_OF_COMPONENTS
        self.comp_height = [0] * NUMBER_OF_COMPONENTS
        self.block_width = [0] * NUMBER_OF_COMPONENTS
        self.block_height = [0] * NUMBER_OF_COMPONENTS
        self.max_hsamp_factor = 1
        self.max_vsamp_factor = 1
        self.components: List[Plane] = []

        self._build_components()

    def add_comment(self, comment: str) -> None:
        """Append ``comment`` to the text written in the COM segment."""
        self.comment += comment

    def _build_components(self) -> None:
        self.max_hsamp_factor = max([1, *self.hsamp_factor])
        self.max_vsamp_factor = max([1, *self.vsamp_factor])
        logger.debug(
            "Sampling factor %d x %d", self.max_hsamp_factor, self.max_vsamp_factor
        )

        width, height = self.image_width, self.image_height
        for i in range(NUMBER_OF_COMPONENTS):
            h, v = self.hsamp_factor[i], self.vsamp_factor[i]
            self.comp_width[i] = (_padded(width) // self.max_hsamp_factor) * h
            if self.comp_width[i] != (width // self.max_hsamp_factor) * h:
                self.last_column_is_dummy[i] = True
            self.block_width[i] = math.ceil(self.comp_width[i] / BLOCK_SIZE)

            self.comp_height[i] = (_padded(height) // self.max_vsamp_factor) * v
            if self.comp_height[i] != (height // self.max_vsamp_factor) * v:
                self.last_row_is_dummy[i] = True
            self.block_height[i] = math.ceil(self.comp_height[i] / BLOCK_SIZE)

        plane_w, plane_h = self.comp_width[0], self.comp_height[0]
        y_plane: Plane = [[0.0] * plane_w for _ in range(plane_h)]
        cb_plane: Plane = [[0.0] * plane_w for _ in range(plane_h)]
        cr_plane: Plane = [[0.0] * plane_w for _ in range(plane_h)]

        for y in range(height):
            y_row, cb_row, cr_row = y_plane[y], cb_plane[y], cr_plane[y]
            for x in range(width):
                r, g, b = (float(c) for c in self.image.get_rgb_components(x, y))
                y_row[x] = _f32(0.299 * r + 0.587 * g + 0.114 * b)
                cb_row[x] = _f32(128.0 + _f32(-0.16874 * r - 0.33126 * g + 0.5 * b))
                cr_row[x] = _f32(128.0 + _f32(0.5 * r - 0.41869 * g - 0.08131 * b))

        self.components = [y_plane, cb_plane, cr_plane]