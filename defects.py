# defects.py v1.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v1.0: "Imprinting"
# - Imprints a single quantized phase vortex onto an existing field.
# - Every cell is re-phased relative to the defect center, measured along the
#   shortest path on the torus.
# - A soft-core magnitude dip (0.2 at the center) replaces the exact zero of a
#   true singularity, so the solver starts from a benign state.
#
# A single net charge is inconsistent on a torus. The diffusion term heals
# the seam by itself, usually by nucleating a compensating defect.

import numpy as np

from field import ComplexGridField
from topologies import torus_displacement

CORE_RADIUS = 4.0
CORE_FLOOR = 0.2

def soft_core_profile(dist: np.ndarray) -> np.ndarray:
    """Magnitude multiplier: 0.2 at the center, rising to 0.2 + 0.8*tanh(1) at CORE_RADIUS and beyond."""
    core = np.minimum(1.0, dist / CORE_RADIUS)
    return CORE_FLOOR + (1.0 - CORE_FLOOR) * np.tanh(core)

def imprint_vortex(field: ComplexGridField, cx: float, cy: float, winding: int = 1):
    """
    Rotates the phase of every cell by winding * angle(cell - center) and scales
    its magnitude by the soft-core profile. The field is modified in place.

    Args:
        field: The field to modify.
        cx, cy: Defect center in (fractional) grid coordinates. Any real value is legal.
        winding: Topological charge, a nonzero integer (the UI only uses +1/-1).
    """
    if isinstance(winding, bool) or int(winding) != winding or winding == 0:
        raise ValueError(f"winding must be a nonzero integer, got {winding!r}.")

    w, h = field.width, field.height
    ys, xs = np.mgrid[0:h, 0:w]
    dx, dy = torus_displacement(xs, ys, cx, cy, w, h)

    delta_phase = np.arctan2(dy, dx) * winding
    profile = soft_core_profile(np.hypot(dx, dy))

    cos_p = np.cos(delta_phase).ravel()
    sin_p = np.sin(delta_phase).ravel()
    profile = profile.ravel()

    u = field.re
    v = field.im
    u_new = u * cos_p - v * sin_p
    v_new = u * sin_p + v * cos_p

    field.re[:] = u_new * profile
    field.im[:] = v_new * profile
