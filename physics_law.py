# physics_law.py v3.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v3.0: "Relaxational Dynamics"
# - The law is now the Time-Dependent Ginzburg-Landau equation:
#       d(psi)/dt = D * Laplacian(psi) + psi * (1 - |psi|^2)
# - The Laplacian is the periodic 5-point stencil on the torus.
# - Stability (dt * D * 4 < 1) is reported, never enforced.

import numbers
import numpy as np
from termcolor import cprint

def periodic_laplacian(a: np.ndarray) -> np.ndarray:
    """
    Discrete 4-neighbor Laplacian of a (height, width) array with wrapped indices:
    left + right + up + down - 4 * center.
    """
    left = np.roll(a, 1, axis=1)     # a[y, x-1]
    right = np.roll(a, -1, axis=1)   # a[y, x+1]
    up = np.roll(a, 1, axis=0)       # a[y-1, x]
    down = np.roll(a, -1, axis=0)    # a[y+1, x]
    return left + right + up + down - 4.0 * a

class GinzburgLandauLaw:
    """
    Holds the physical parameters of the simulation.

    The parameters are plain attributes and may be changed between steps;
    the solver reads them at the start of every step.
    """
    def __init__(self, diffusion: float = 0.5, dt: float = 0.2,
                 noise_level: float = 0.0, steps_per_frame: int = 1):
        for name, value in (('diffusion', diffusion), ('dt', dt), ('noise_level', noise_level)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise TypeError(f"{name} must be numeric.")
        if isinstance(steps_per_frame, bool) or not isinstance(steps_per_frame, numbers.Integral):
            raise TypeError("steps_per_frame must be an integer.")
        if diffusion <= 0:
            raise ValueError("diffusion must be positive.")
        if dt <= 0:
            raise ValueError("dt must be positive.")
        if noise_level < 0:
            raise ValueError("noise_level must be non-negative.")
        if steps_per_frame < 1:
            raise ValueError("steps_per_frame must be at least 1.")

        self.diffusion = float(diffusion)
        self.dt = float(dt)
        self.noise_level = float(noise_level)
        self.steps_per_frame = int(steps_per_frame)

        if not self.is_stable:
            cprint(f"   -> Warning: dt*D*4 = {self.stability_number:.3f} >= 1, "
                   f"the explicit scheme may diverge.", 'yellow')

    def __repr__(self):
        return (f"TDGL(D={self.diffusion:.3f}, dt={self.dt:.4f}, "
                f"noise={self.noise_level:.3f}, steps/frame={self.steps_per_frame})")

    @property
    def stability_number(self) -> float:
        return self.dt * self.diffusion * 4.0

    @property
    def is_stable(self) -> bool:
        """Sufficient condition for the diagonal term of the explicit scheme to stay bounded."""
        return self.stability_number < 1.0

    @property
    def noise_scale(self) -> float:
        return self.noise_level * 0.1

    def reaction(self, u: np.ndarray, v: np.ndarray) -> np.ndarray:
        """
        The local drive (1 - |psi|^2). Zero at |psi| = 1, positive below, negative above.
        Multiplied by each component it gives the cubic reaction term.
        """
        return 1.0 - (u * u + v * v)

    def time_derivative(self, u: np.ndarray, v: np.ndarray) -> tuple:
        """Right-hand side of the TDGL equation for (height, width) component arrays."""
        reaction = self.reaction(u, v)
        du = self.diffusion * periodic_laplacian(u) + u * reaction
        dv = self.diffusion * periodic_laplacian(v) + v * reaction
        return du, dv

    def forward_step_euler(self, u: np.ndarray, v: np.ndarray) -> tuple:
        """One explicit Euler step. Returns new arrays, the inputs are not modified."""
        du, dv = self.time_derivative(u, v)
        return u + self.dt * du, v + self.dt * dv
