"""Edge detection and bevel seed generation from a mask."""

import numpy as np

from .field import SENTINEL, as_grid, flat, neighborhood


def detect_edges(width, height, mask):
    """Mark pixels whose 3x3 neighbourhood holds a different mask value.

    Returns:
        Boolean array of shape (height, width).
    """
    grid = as_grid(width, height, mask, "mask")
    edge = np.zeros(grid.shape, dtype=bool)
    for _, _, shifted in neighborhood(grid):
        edge |= shifted != grid
    return edge


def detect_bevel(width, height, mask, use_sentinel=False):
    """Build the bevel seed field that starts the distance relaxation.

    Every pixel goes through ``scale * (1 - edge * mask)``: edge pixels on
    the inside of the shape become 0, everything else becomes ``scale``.
    ``scale`` is 1 in plain mode and SENTINEL when ``use_sentinel`` is set,
    so that only distances propagated from a real edge are finite.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mask: Flat mask values in [0, 1], 1 = inside.
        use_sentinel: Seed unresolved pixels with SENTINEL instead of 1.

    Returns:
        Flat float32 field of width * height values.
    """
    grid = as_grid(width, height, mask, "mask")
    edge = detect_edges(width, height, grid).astype(np.float32)
    scale = SENTINEL if use_sentinel else 1.0

    seed = (1.0 - edge * grid) * np.float32(scale)
    return flat(seed)
