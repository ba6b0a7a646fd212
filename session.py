# session.py v1.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v1.0: "Controller"
# - One object owns the field, the solver, the renderer and the
#   compositor, plus the winding sign of the next user-spawned defect.
# - The outer layer (a window, a notebook, the headless driver) only calls
#   resize / spawn / press / drag / release / tick.
# - Nothing here schedules itself: a tick runs steps_per_frame solver steps,
#   then exactly one render.

import math
import numpy as np
from termcolor import cprint

from styling import C
from topologies import GeometryFactory, GridGeometry
from field import ComplexGridField
from physics_law import GinzburgLandauLaw
from simulation import Simulation
from defects import imprint_vortex
from renderer import FieldRenderer, Compositor

DRAG_SPAWN_DISTANCE = 30.0  # display pixels between defects spawned by a drag

class Session:
    """Interactive state of one simulation window."""
    def __init__(self, display_width: float, display_height: float,
                 target_cell_size: float = 12,
                 law: GinzburgLandauLaw = None,
                 smooth: bool = False,
                 seed: int = None,
                 drag_spawn_distance: float = DRAG_SPAWN_DISTANCE):
        cprint(f"Opening session ({display_width}x{display_height} display)", C.SUBHEADER, attrs=C.BOLD_ATTR)

        self.rng = np.random.default_rng(seed)
        self.law = law if law is not None else GinzburgLandauLaw()
        self.target_cell_size = target_cell_size
        self.drag_spawn_distance = drag_spawn_distance

        # Topological flip-flop: +1, -1, +1, ... so a second click undoes the first
        self.next_winding = 1
        self.paused = False
        self.frame_count = 0

        self._pointer_down = False
        self._last_spawn_pos = (0.0, 0.0)

        self.geometry = self._make_geometry(display_width, display_height)
        self.field = ComplexGridField(self.geometry.width, self.geometry.height, rng=self.rng)
        self.field.seed()
        self.simulation = Simulation(self.field, self.law, rng=self.rng)
        self.renderer = FieldRenderer(self.geometry.width, self.geometry.height)
        self.compositor = Compositor(display_width, display_height, smooth=smooth)

    # --- Grid lifecycle ---

    def resize(self, display_width: float, display_height: float, target_cell_size: float = None):
        """Hard reset onto a new geometry. The old field content is discarded."""
        if target_cell_size is not None:
            self.target_cell_size = target_cell_size
        self.geometry = self._make_geometry(display_width, display_height)
        self._reallocate(self.geometry, display_width, display_height)

    def _make_geometry(self, display_width: float, display_height: float) -> GridGeometry:
        return GeometryFactory.create('torus', {'display_width': display_width,
                                                'display_height': display_height,
                                                'target_cell_size': self.target_cell_size})

    def _reallocate(self, geometry: GridGeometry, display_width: float, display_height: float):
        self.field.allocate(geometry.width, geometry.height)
        self.field.seed()
        self.renderer.resize(geometry.width, geometry.height)
        self.compositor = Compositor(display_width, display_height, smooth=self.compositor.smooth)

    def reset(self):
        """Reseeds the hot initial state without reallocating."""
        self.field.seed()

    # --- Rendering options ---

    @property
    def smooth(self) -> bool:
        return self.compositor.smooth

    def set_smooth(self, smooth: bool):
        self.compositor.smooth = bool(smooth)

    # --- Pointer interaction ---

    def spawn_vortex(self, display_x: float, display_y: float) -> int:
        """Imprints a defect under the pointer and flips the sign for the next one."""
        cx, cy = self.geometry.display_to_grid(display_x, display_y)
        winding = self.next_winding
        imprint_vortex(self.field, cx, cy, winding)
        self.next_winding *= -1
        return winding

    def press(self, display_x: float, display_y: float) -> int:
        self._pointer_down = True
        self._last_spawn_pos = (display_x, display_y)
        return self.spawn_vortex(display_x, display_y)

    def drag(self, display_x: float, display_y: float):
        """Spawns only after the pointer has travelled far enough, so drags don't pile defects up."""
        if not self._pointer_down:
            return None
        dist = math.hypot(display_x - self._last_spawn_pos[0], display_y - self._last_spawn_pos[1])
        if dist <= self.drag_spawn_distance:
            return None
        self._last_spawn_pos = (display_x, display_y)
        return self.spawn_vortex(display_x, display_y)

    def release(self):
        self._pointer_down = False

    # --- Frame loop ---

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def render(self) -> np.ndarray:
        """Low-resolution color buffer of the current state."""
        return self.renderer.render(self.field)

    def tick(self):
        """
        One frame: steps_per_frame solver steps, then one render and composite.
        Returns the display surface, or None while paused.
        """
        if self.paused:
            return None
        for _ in range(self.law.steps_per_frame):
            self.simulation.step()
            self.frame_count += 1
        return self.compositor.composite(self.render())
