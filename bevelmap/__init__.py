"""bevelmap - Generate bevelled height and normal maps from mask images."""

from .bevel import detect_bevel, detect_edges
from .distance import relax, relax_distance
from .errors import BevelMapError, FieldLengthMismatch, InvalidDimensions
from .field import SENTINEL
from .height import compose_height
from .imageio import load_mask
from .normalize import normalize
from .normals import estimate_normals
from .pipeline import PipelineConfig, PipelineResult, run

__version__ = "0.1.0"
__all__ = [
    "generate", "run", "PipelineConfig", "PipelineResult",
    "detect_bevel", "detect_edges", "relax_distance", "relax",
    "normalize", "compose_height", "estimate_normals", "SENTINEL",
    "BevelMapError", "InvalidDimensions", "FieldLengthMismatch",
]


def generate(mask_path, channel="R", **kwargs):
    """Generate every map for a mask image on disk.

    Args:
        mask_path: Path to the mask image.
        channel: Image channel read as the mask ("R", "G", "B", "A" or
            "L" for luminance).
        **kwargs: PipelineConfig parameters (pass_count, use_sentinel,
            divide_by_pass_count).

    Returns:
        PipelineResult with the mask, bevel, distance, height and normal maps.
    """
    width, height, mask = load_mask(mask_path, channel)
    config = PipelineConfig(**kwargs)
    return run(width, height, mask, config=config)
