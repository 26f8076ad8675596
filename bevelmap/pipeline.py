"""Mask to normal map pipeline.

Runs edge detection, distance relaxation, height composition,
normalization and normal estimation in order and keeps every
intermediate map.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .bevel import detect_bevel
from .distance import relax, step_increment
from .field import SENTINEL, as_grid, flat
from .height import compose_height
from .normalize import normalize
from .normals import estimate_normals

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for map generation."""

    # Relaxation passes; the bevel is pass_count pixels wide
    pass_count: int = 50

    # Seed unresolved pixels with SENTINEL instead of 1.0
    use_sentinel: bool = False

    # Scale each step cost by 1 / pass_count
    divide_by_pass_count: bool = True


@dataclass
class PipelineResult:
    """Every map produced by one pipeline run, all flat and row-major."""

    width: int
    height: int
    mask: np.ndarray
    bevel: np.ndarray
    distance: np.ndarray
    height_map: np.ndarray
    normals: np.ndarray
    sentinel: Optional[float] = None

    @property
    def unresolved(self):
        """Number of distance pixels still holding the sentinel."""
        if self.sentinel is None:
            return 0
        return int(np.count_nonzero(self.distance == np.float32(self.sentinel)))


def run(width, height, mask, config=None):
    """Generate bevel, distance, height and normal maps from a mask.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mask: Flat mask values in [0, 1], row-major, 1 = inside.
        config: PipelineConfig instance (defaults used if None).

    Returns:
        PipelineResult holding every intermediate map.
    """
    if config is None:
        config = PipelineConfig()

    mask = flat(as_grid(width, height, mask, "mask"))
    sentinel = SENTINEL if config.use_sentinel else None

    # 1. Bevel seed
    bevel = detect_bevel(width, height, mask, use_sentinel=config.use_sentinel)
    logger.debug("bevel seed: %d zero pixels", int(np.count_nonzero(bevel == 0)))

    # 2. Distance relaxation
    distance = relax(width, height, bevel, config.pass_count,
                     sentinel=sentinel,
                     divide_by_pass_count=config.divide_by_pass_count)

    # 3. Height, flattened outside the mask
    height_map = compose_height(width, height, mask, distance)
    if sentinel is not None:
        height_map = _keep_unresolved(mask, distance, height_map, config)
    height_map = normalize(height_map, sentinel)

    # 4. Normals
    normals = estimate_normals(width, height, height_map)

    result = PipelineResult(width=width, height=height, mask=mask,
                            bevel=bevel, distance=distance,
                            height_map=height_map, normals=normals,
                            sentinel=sentinel)
    logger.info("generated %dx%d maps with %d passes (%d unresolved)",
                width, height, config.pass_count, result.unresolved)
    return result


def _keep_unresolved(mask, distance, height_map, config):
    """Put SENTINEL back on unresolved pixels inside the mask.

    ``mask * SENTINEL`` is finite for masks below 1.0 and would become the
    normalization peak. Seeds from fractional edges (``(1 - m) * SENTINEL``)
    are finite too, so anything farther than pass_count diagonal steps
    cannot have come from a zero seed and counts as unresolved.
    """
    reach = config.pass_count * step_increment(
        1, 1, config.pass_count, config.divide_by_pass_count)
    unresolved = distance > np.float32(reach * 1.001)
    out = np.where(unresolved & (mask > 0), np.float32(SENTINEL), height_map)
    return out.astype(np.float32)
