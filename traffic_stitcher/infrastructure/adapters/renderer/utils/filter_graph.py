"""Video filter chains for placing a still image on the output canvas.

``build_fit_filter`` produces the ffmpeg expression. ``fit_scale_factor`` and
``fill_output_size`` evaluate the same geometry in Python so callers (and
tests) can reason about the result without running ffmpeg.
"""

from __future__ import annotations

import math
from typing import Tuple

from traffic_stitcher.core.config import settings
from traffic_stitcher.core.pyd_schemas import FitMode


def _fit_chain(width: int, height: int, pix_fmt: str) -> str:
    # commas inside min() are escaped so they are not read as filter separators
    factor = f"min(1\\,min({width}/iw\\,{height}/ih))"
    return ",".join(
        [
            f"scale=iw*{factor}:ih*{factor}",
            f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2:black",
            f"format={pix_fmt}",
        ]
    )


def _fill_chain(width: int, height: int, pix_fmt: str) -> str:
    return ",".join(
        [
            f"scale={width}:{height}:force_original_aspect_ratio=increase",
            f"crop={width}:{height}",
            f"format={pix_fmt}",
        ]
    )


def build_fit_filter(
    fit_mode: FitMode | str,
    target_width: int | None = None,
    target_height: int | None = None,
    pix_fmt: str | None = None,
) -> str:
    """Return the ``-vf`` chain placing an image on a ``target_width x target_height`` canvas.

    fit: shrink to fit (never enlarge), centre, pad with black.
    fill: scale to cover the canvas, crop the overflow.
    """
    mode = FitMode(fit_mode)
    w = target_width or settings.video_width
    h = target_height or settings.video_height
    fmt = pix_fmt or settings.video_pixel_format_image
    if mode is FitMode.fill:
        return _fill_chain(w, h, fmt)
    return _fit_chain(w, h, fmt)


def black_background_filter(pix_fmt: str | None = None) -> str:
    """The generated canvas is already the target size; only normalise pixels."""
    return f"format={pix_fmt or settings.video_pixel_format_black}"


def fit_scale_factor(
    src_width: int, src_height: int, target_width: int, target_height: int
) -> float:
    if src_width <= 0 or src_height <= 0:
        raise ValueError("source dimensions must be positive")
    return min(1.0, min(target_width / src_width, target_height / src_height))


def fit_output_size(
    src_width: int, src_height: int, target_width: int, target_height: int
) -> Tuple[int, int]:
    """Size of the scaled image before padding (ffmpeg truncates to integers)."""
    factor = fit_scale_factor(src_width, src_height, target_width, target_height)
    return int(src_width * factor), int(src_height * factor)


def fill_scaled_size(
    src_width: int, src_height: int, target_width: int, target_height: int
) -> Tuple[int, int]:
    """Size after ``force_original_aspect_ratio=increase``, before the crop."""
    if src_width <= 0 or src_height <= 0:
        raise ValueError("source dimensions must be positive")
    factor = max(target_width / src_width, target_height / src_height)
    return (
        max(target_width, math.ceil(src_width * factor - 1e-9)),
        max(target_height, math.ceil(src_height * factor - 1e-9)),
    )


def fill_output_size(
    src_width: int, src_height: int, target_width: int, target_height: int
) -> Tuple[int, int]:
    """Frame size after scale and crop; always the full canvas."""
    scaled_w, scaled_h = fill_scaled_size(
        src_width, src_height, target_width, target_height
    )
    return min(scaled_w, target_width), min(scaled_h, target_height)
