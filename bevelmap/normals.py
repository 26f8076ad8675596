"""Tangent-space normal map from a height field."""

import numpy as np

from .field import as_grid


def _unit(v):
    length = np.sqrt(np.sum(v * v, axis=-1, keepdims=True))
    return v / length


def estimate_normals(width, height, height_field):
    """Estimate per-pixel normals with central differences.

    For pixel (x, y) the tangents are ``(2, 0, right - left)`` and
    ``(0, 2, down - up)``, both made unit length, and the normal is their
    cross product. The cross product is not renormalized, so steep slopes
    give slightly short vectors. Components are remapped from [-1, 1] to
    [0, 1] with ``(n + 1) * 0.5`` for storage.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        height_field: Flat heights, normally in [0, 1].

    Returns:
        float32 array of shape (width * height, 3).
    """
    grid = as_grid(width, height, height_field, "height field")
    padded = np.pad(grid, 1, mode='edge')

    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    up = padded[:-2, 1:-1]
    down = padded[2:, 1:-1]

    zeros = np.zeros_like(grid)
    twos = np.full_like(grid, 2.0)
    va = _unit(np.stack([twos, zeros, right - left], axis=-1))
    vb = _unit(np.stack([zeros, twos, down - up], axis=-1))

    normal = np.cross(va, vb)
    normal = (normal + 1.0) * 0.5

    return normal.reshape(-1, 3).astype(np.float32)
