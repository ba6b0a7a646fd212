# simulation.py v20.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v20.0: "Explicit Torus Solver"
# - The engine advances a ComplexGridField with one explicit Euler step of
#   the TDGL law per call.
# - Reads come from the current buffers only, results land in the next
#   buffers, and the field swaps the pairs at the end of the step.
# - Thermal noise is added to the current buffer in place, before the
#   stencil, so neighbors see the perturbed values within the same step.

import numpy as np
from termcolor import cprint

from field import ComplexGridField
from physics_law import GinzburgLandauLaw

class Simulation:
    """
    The solver for the Ginzburg-Landau field. Single-threaded and synchronous:
    `step()` never schedules itself, the caller owns the loop.
    """
    def __init__(self, field: ComplexGridField, law: GinzburgLandauLaw = None,
                 rng: np.random.Generator = None):
        cprint(f"3. Assembling Simulation Engine (TDGL, explicit Euler)...", 'cyan', attrs=['bold'])

        self.field = field
        self.law = law if law is not None else GinzburgLandauLaw()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.step_count = 0

        cprint(f"   -> Law: {self.law}", 'green')

    def _apply_thermal_noise(self, noise_scale: float):
        """Perturbs both components of every cell by U[-0.5, 0.5) * noise_scale, in place."""
        size = self.field.num_cells
        self.field.re += (self.rng.random(size) - 0.5) * noise_scale
        self.field.im += (self.rng.random(size) - 0.5) * noise_scale

    def step(self):
        """Advances the field by exactly one time increment dt."""
        law = self.law
        field = self.field

        if law.noise_level > 0:
            self._apply_thermal_noise(law.noise_scale)

        u = field.grid_view(field.re)
        v = field.grid_view(field.im)
        u_next, v_next = law.forward_step_euler(u, v)

        field.grid_view(field.re_next)[...] = u_next
        field.grid_view(field.im_next)[...] = v_next
        field.swap_buffers()
        self.step_count += 1

    def run(self, num_steps: int):
        """Executes `num_steps` consecutive steps."""
        for _ in range(num_steps):
            self.step()
