import numpy as np


def srgb_to_linear(values) -> np.ndarray:
    """Piecewise sRGB transfer curve, applied element-wise to values in [0, 1]."""
    c = np.asarray(values, dtype=np.float64)
    return np.where(
        c < 0.04045,
        c * 0.0773993808,
        np.power(c * 0.9478672986 + 0.0521327014, 2.4),
    )


def unpack_rgb(packed) -> np.ndarray:
    """
    Split packed 0x00RRGGBB integers into an (N, 3) array of r, g, b in [0, 1].
    """
    p = np.asarray(packed, dtype=np.int64)
    r = (p >> 16) & 0xFF
    g = (p >> 8) & 0xFF
    b = p & 0xFF
    return np.stack([r, g, b], axis=-1) / 255.0


def linear_rgb(r, g, b) -> np.ndarray:
    """Interleave per-channel sRGB values (each in [0, 1]) into a flat linear r,g,b,... array."""
    rgb = np.stack([np.asarray(r), np.asarray(g), np.asarray(b)], axis=-1)
    return srgb_to_linear(rgb).astype(np.float32).reshape(-1)
