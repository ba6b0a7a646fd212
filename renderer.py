# renderer.py v11.0 - "Two Resolutions"
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# - Stage 1: one RGBA pixel per grid cell. Phase -> hue, magnitude -> lightness.
# - Stage 2: the small buffer is scaled to the display surface, either
#   nearest-neighbor (blocky, the default) or bilinear (smooth).
# - The scaling policy never touches the color computation.

import os
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from scipy.ndimage import map_coordinates
from termcolor import cprint

from field import ComplexGridField

def _hue_to_channel(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Piecewise linear HSL helper, vectorized."""
    t = np.where(t < 0, t + 1, t)
    t = np.where(t > 1, t - 1, t)
    return np.select(
        [t < 1 / 6, t < 1 / 2, t < 2 / 3],
        [p + (q - p) * 6 * t, q, p + (q - p) * (2 / 3 - t) * 6],
        default=p,
    )

def hsl_to_rgb(h, s, l) -> np.ndarray:
    """
    Standard HSL -> RGB conversion.

    Args:
        h, s, l: Hue, saturation and lightness in [0, 1], scalars or arrays of one shape.

    Returns:
        np.ndarray: uint8 array of shape (..., 3), channels rounded half-up.
    """
    h, s, l = np.broadcast_arrays(np.asarray(h, dtype=np.float64),
                                  np.asarray(s, dtype=np.float64),
                                  np.asarray(l, dtype=np.float64))
    q = np.where(l < 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q

    r = _hue_to_channel(p, q, h + 1 / 3)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1 / 3)

    # Achromatic case
    grey = s == 0
    r = np.where(grey, l, r)
    g = np.where(grey, l, g)
    b = np.where(grey, l, b)

    rgb = np.stack([r, g, b], axis=-1)
    return np.clip(np.floor(rgb * 255 + 0.5), 0, 255).astype(np.uint8)

def field_to_hsl(field: ComplexGridField) -> tuple:
    """
    Maps every cell to (hue in degrees [0, 360), saturation %, lightness %).
    Lightness is clamped so over-unity magnitudes stay in range.
    """
    mag = np.hypot(field.re, field.im)
    angle = np.arctan2(field.im, field.re)
    hue = np.mod(angle * 180 / np.pi + 360, 360)
    lightness = np.minimum(1.0, mag) * 50
    saturation = np.full_like(hue, 100.0)
    return hue, saturation, lightness

class FieldRenderer:
    """Owns the low-resolution RGBA buffer, one pixel per grid cell."""
    def __init__(self, width: int, height: int):
        self.resize(width, height)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self.color_buffer = np.zeros((height, width, 4), dtype=np.uint8)

    def render(self, field: ComplexGridField) -> np.ndarray:
        """Recomputes the color buffer from the current field state and returns it."""
        if (field.width, field.height) != (self.width, self.height):
            self.resize(field.width, field.height)

        hue, saturation, lightness = field_to_hsl(field)
        rgb = hsl_to_rgb(hue / 360, saturation / 100, lightness / 100)

        pixels = self.color_buffer.reshape(-1, 4)
        pixels[:, :3] = rgb
        pixels[:, 3] = 255
        return self.color_buffer

class Compositor:
    """Scales the low-resolution color buffer to the display surface."""
    def __init__(self, display_width: int, display_height: int, smooth: bool = False):
        self.display_width = int(round(display_width))
        self.display_height = int(round(display_height))
        self.smooth = smooth

    def _source_coordinates(self, src_size: int, dst_size: int) -> np.ndarray:
        # Destination pixel centers mapped back into the source image
        return (np.arange(dst_size) + 0.5) * (src_size / dst_size)

    def _nearest(self, buffer: np.ndarray) -> np.ndarray:
        src_h, src_w = buffer.shape[:2]
        cols = np.minimum(self._source_coordinates(src_w, self.display_width).astype(np.intp), src_w - 1)
        rows = np.minimum(self._source_coordinates(src_h, self.display_height).astype(np.intp), src_h - 1)
        return buffer[rows[:, None], cols[None, :]]

    def _bilinear(self, buffer: np.ndarray) -> np.ndarray:
        src_h, src_w = buffer.shape[:2]
        cols = self._source_coordinates(src_w, self.display_width) - 0.5
        rows = self._source_coordinates(src_h, self.display_height) - 0.5
        grid_rows, grid_cols = np.meshgrid(rows, cols, indexing='ij')

        surface = np.empty((self.display_height, self.display_width, buffer.shape[2]), dtype=np.uint8)
        for c in range(buffer.shape[2]):
            channel = map_coordinates(buffer[:, :, c].astype(np.float64),
                                      [grid_rows, grid_cols], order=1, mode='nearest')
            surface[:, :, c] = np.clip(np.floor(channel + 0.5), 0, 255).astype(np.uint8)
        return surface

    def composite(self, buffer: np.ndarray) -> np.ndarray:
        """Returns a (display_height, display_width, 4) uint8 surface."""
        if self.smooth:
            return self._bilinear(buffer)
        return self._nearest(buffer)

def save_frame(surface: np.ndarray, path: str):
    """Writes a composited RGBA surface as a PNG."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.imsave(path, surface)

# This block allows for independent testing of the module.
if __name__ == "__main__":
    cprint("\n--- Testing renderer.py v11.0 ---", 'yellow', attrs=['bold'])
    field = ComplexGridField(8, 6)
    field.seed()
    buffer = FieldRenderer(8, 6).render(field)
    surface = Compositor(80, 60, smooth=True).composite(buffer)
    assert surface.shape == (60, 80, 4)
    cprint("  > SUCCESS: Rendered and composited a seeded field.", 'green')
