"""Height field composition."""

from .field import as_grid, flat


def compose_height(width, height, mask, distance):
    """Multiply mask and distance per pixel.

    Pixels outside the mask (value 0) come out as exactly 0 whatever their
    distance, including the sentinel.
    """
    mask_grid = as_grid(width, height, mask, "mask")
    dist_grid = as_grid(width, height, distance, "distance field")
    return flat(mask_grid * dist_grid)
