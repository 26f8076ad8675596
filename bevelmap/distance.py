"""Chamfer-style distance relaxation over a 3x3 kernel.

Each pass replaces every pixel by the smallest "neighbour value plus step
cost" found in its clamp-to-edge 3x3 neighbourhood. Passes read only the
previous field, so the result does not depend on pixel visiting order.
Repeating the pass N times grows the distance front N pixels away from
the zero-valued seed pixels.
"""

import logging
import math

import numpy as np

from .field import as_grid, flat, neighborhood

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2.0)


def kernel_weight(kx, ky):
    """Euclidean length of a kernel offset: 0, 1 or sqrt(2)."""
    return math.hypot(kx, ky)


def step_increment(kx, ky, pass_count=1, divide_by_pass_count=True):
    """Distance added when propagating across offset (kx, ky)."""
    inc = kernel_weight(kx, ky) / SQRT2 / SQRT2
    if divide_by_pass_count:
        inc /= pass_count
    return inc


def _check_pass(pass_count, pass_index):
    if pass_count < 1:
        raise ValueError(f"pass_count must be at least 1, got {pass_count}")
    if not 0 <= pass_index < pass_count:
        raise ValueError(
            f"pass_index {pass_index} outside [0, {pass_count})"
        )


def relax_distance(width, height, field, sentinel=None, pass_count=1,
                   pass_index=0, divide_by_pass_count=True):
    """Run one relaxation pass and return the new field.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        field: Flat field from the bevel seed or the previous pass.
        sentinel: Value marking unresolved pixels. When given, a neighbour
            holding it never contributes a finite candidate, and the
            running minimum starts at it. When None the minimum starts
            at sqrt(2), above any plain seed value.
        pass_count: Total number of passes the caller will run.
        pass_index: Zero-based index of this pass.
        divide_by_pass_count: Scale step costs by 1 / pass_count.

    Returns:
        Newly allocated flat float32 field. ``field`` is left untouched.
    """
    _check_pass(pass_count, pass_index)
    grid = as_grid(width, height, field, "distance field")

    start = SQRT2 if sentinel is None else sentinel
    out = np.full(grid.shape, start, dtype=np.float32)

    for kx, ky, shifted in neighborhood(grid):
        inc = np.float32(step_increment(kx, ky, pass_count,
                                        divide_by_pass_count))
        candidate = shifted + inc
        if sentinel is not None:
            candidate = np.where(shifted == np.float32(sentinel),
                                 np.float32(sentinel), candidate)
        np.minimum(out, candidate, out=out)

    if sentinel is not None and logger.isEnabledFor(logging.DEBUG):
        unresolved = int(np.count_nonzero(out == np.float32(sentinel)))
        logger.debug("pass %d/%d: %d unresolved pixels",
                     pass_index + 1, pass_count, unresolved)

    return flat(out)


def relax(width, height, seed, pass_count, sentinel=None,
          divide_by_pass_count=True):
    """Apply ``relax_distance`` pass_count times, feeding each output back.

    Returns:
        Flat float32 distance field after the final pass.
    """
    _check_pass(pass_count, 0)
    distance = flat(as_grid(width, height, seed, "bevel seed"))
    for i in range(pass_count):
        distance = relax_distance(width, height, distance, sentinel,
                                  pass_count, i, divide_by_pass_count)
    return distance
