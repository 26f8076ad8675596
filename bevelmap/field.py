"""Flat image fields and clamp-to-edge neighbourhood access.

Every map in the pipeline is a flat float32 array of ``width * height``
values in row-major order. Pixel (x, y) lives at ``x + y * width``, with
out-of-range coordinates clamped to the nearest edge pixel.
"""

import numpy as np

from .errors import InvalidDimensions, FieldLengthMismatch

# Marker for "no distance known yet"
SENTINEL = float(np.finfo(np.float32).max)

# 3x3 kernel offsets as (kx, ky), row by row
KERNEL = [(kx, ky) for ky in (-1, 0, 1) for kx in (-1, 0, 1)]


def check_dimensions(width, height):
    """Raise InvalidDimensions unless both sides are positive integers."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimensions(f"{name} must be positive, got {value}")


def as_grid(width, height, field, name="field"):
    """Validate a flat field and view it as a (height, width) float32 array.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        field: Sequence of width * height scalars, row-major.
        name: Field name used in error messages.

    Returns:
        Array of shape (height, width). The caller must not write to it,
        it may share memory with ``field``.
    """
    check_dimensions(width, height)
    arr = np.asarray(field, dtype=np.float32).reshape(-1)
    if arr.size != width * height:
        raise FieldLengthMismatch(name, width * height, arr.size)
    return arr.reshape(height, width)


def flat(grid):
    """Return a freshly allocated flat float32 copy of a grid."""
    return np.array(grid, dtype=np.float32).reshape(-1)


def neighborhood(grid):
    """Yield (kx, ky, shifted) for each offset of the 3x3 kernel.

    ``shifted[y, x]`` holds ``grid[clamp(y + ky), clamp(x + kx)]``.
    """
    h, w = grid.shape
    padded = np.pad(grid, 1, mode='edge')
    for kx, ky in KERNEL:
        yield kx, ky, padded[1 + ky:1 + ky + h, 1 + kx:1 + kx + w]


def get_index(x, y, width, height):
    """Flat index of pixel (x, y) with coordinates clamped to the image."""
    x = min(max(x, 0), width - 1)
    y = min(max(y, 0), height - 1)
    return x + y * width
