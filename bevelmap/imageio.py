"""Pillow adapters: masks in, greyscale and normal map images out."""

from pathlib import Path

import numpy as np
from PIL import Image

from .errors import FieldLengthMismatch
from .field import as_grid, check_dimensions
from .normalize import normalize

CHANNELS = ("R", "G", "B", "A", "L")


def mask_from_image(image, channel="R"):
    """Extract a mask from a PIL image.

    Args:
        image: Any PIL image.
        channel: "R", "G", "B" or "A" to read one channel, "L" for
            luminance.

    Returns:
        (width, height, mask) with mask a flat float32 array in [0, 1].
    """
    channel = channel.upper()
    if channel not in CHANNELS:
        raise ValueError(f"unknown channel {channel!r}, expected one of {CHANNELS}")

    if channel == "L":
        band = image.convert("L")
    else:
        band = image.convert("RGBA").getchannel(channel)

    arr = np.array(band, dtype=np.float32) / 255.0
    width, height = image.size
    return width, height, arr.reshape(-1)


def load_mask(path, channel="R"):
    """Load a mask image from disk. See ``mask_from_image``."""
    with Image.open(path) as image:
        return mask_from_image(image, channel)


def field_to_image(width, height, field):
    """Render a flat field as an 8-bit greyscale image, clipping to [0, 1]."""
    grid = as_grid(width, height, field, "field")
    data = np.clip(grid, 0, 1) * 255
    return Image.fromarray(np.round(data).astype(np.uint8), 'L')


def normals_to_image(width, height, normals):
    """Render remapped normals (components in [0, 1]) as an RGB image."""
    check_dimensions(width, height)
    normals = np.asarray(normals, dtype=np.float32)
    if normals.ndim != 2 or normals.shape[1] != 3:
        raise FieldLengthMismatch("normals", (width * height, 3), normals.shape)
    rgb = np.stack([
        as_grid(width, height, normals[:, c], name)
        for c, name in enumerate(("normal x", "normal y", "normal z"))
    ], axis=-1)
    data = np.clip(rgb, 0, 1) * 255
    return Image.fromarray(np.round(data).astype(np.uint8), 'RGB')


def save_maps(result, out_dir, prefix=""):
    """Write every map of a PipelineResult as PNG files.

    The distance map is normalized for display first; unresolved pixels
    come out white.

    Returns:
        Dict mapping map name to the written Path.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    w, h = result.width, result.height

    images = {
        "mask": field_to_image(w, h, result.mask),
        "bevel": field_to_image(w, h, normalize(result.bevel, result.sentinel)),
        "distance": field_to_image(
            w, h, normalize(result.distance, result.sentinel)),
        "height": field_to_image(w, h, result.height_map),
        "normal": normals_to_image(w, h, result.normals),
    }

    paths = {}
    for name, image in images.items():
        path = out_dir / f"{prefix}{name}.png"
        image.save(str(path))
        paths[name] = path
    return paths
