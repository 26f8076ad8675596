"""Rescale fields into [0, 1]."""

import numpy as np


def normalize(field, sentinel=None):
    """Divide a field by its largest finite value.

    Args:
        field: Flat field of non-negative values.
        sentinel: Optional unresolved marker. Pixels holding it are left
            out of the maximum and map to exactly 1.0.

    Returns:
        Newly allocated flat float32 field in [0, 1]. A field whose
        maximum is 0 maps to all zeros (sentinel pixels still to 1.0).
    """
    values = np.asarray(field, dtype=np.float32).reshape(-1)

    if sentinel is None:
        resolved = np.ones(values.shape, dtype=bool)
    else:
        resolved = values < np.float32(sentinel)

    peak = float(values[resolved].max()) if resolved.any() else 0.0
    peak = max(peak, 0.0)

    out = np.ones(values.shape, dtype=np.float32)
    if peak > 0:
        out[resolved] = values[resolved] / np.float32(peak)
    else:
        out[resolved] = 0.0
    return out
