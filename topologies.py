# topologies.py v2.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v2.0: "Flat Torus"
# - The substrate is a rectangular grid with periodic boundaries in both axes.
# - GridGeometry carries the mapping from display pixels to fractional grid
#   coordinates (cell_width / cell_height).
# - A geometry change is a hard reset: owners reallocate and reseed the field.

import math
import numpy as np
from termcolor import cprint

MIN_CELL_SIZE = 2

class GridGeometry:
    """A simple, passive data container for the torus grid and its display mapping."""
    def __init__(self, width: int, height: int, display_width: float, display_height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = int(width)
        self.height = int(height)
        self.display_width = display_width
        self.display_height = display_height
        self.num_cells = self.width * self.height

        # Ratio used to translate pointer positions into grid coordinates
        self.cell_width = display_width / self.width
        self.cell_height = display_height / self.height

    def display_to_grid(self, display_x: float, display_y: float) -> tuple:
        """Converts display pixel coordinates to fractional grid coordinates."""
        return display_x / self.cell_width, display_y / self.cell_height

    def __repr__(self):
        return (f"GridGeometry({self.width}x{self.height} cells, "
                f"cell={self.cell_width:.2f}x{self.cell_height:.2f}px)")

def torus_displacement(x, y, cx: float, cy: float, width: int, height: int):
    """
    Shortest displacement from (cx, cy) to (x, y) on a width x height torus.

    Works element-wise on numpy arrays. The center is wrapped into the grid
    first, so any real coordinate is accepted.
    """
    x1 = cx % width
    y1 = cy % height

    dx = np.asarray(x, dtype=np.float64) - x1
    dy = np.asarray(y, dtype=np.float64) - y1
    dx = np.where(dx > width / 2, dx - width, dx)
    dx = np.where(dx < -width / 2, dx + width, dx)
    dy = np.where(dy > height / 2, dy - height, dy)
    dy = np.where(dy < -height / 2, dy + height, dy)
    return dx, dy

# --- GENERATOR FUNCTIONS ---

def generate_torus_geometry(display_width: float, display_height: float,
                            target_cell_size: float = 12) -> GridGeometry:
    """Derives the grid size from the display size and the target cell size in pixels."""
    if display_width <= 0 or display_height <= 0:
        raise ValueError(f"Display size must be positive, got {display_width}x{display_height}.")

    # Cells smaller than 2px make the grid uselessly dense
    safe_cell_size = max(MIN_CELL_SIZE, target_cell_size)
    width = math.ceil(display_width / safe_cell_size)
    height = math.ceil(display_height / safe_cell_size)

    geometry = GridGeometry(width, height, display_width, display_height)
    cprint(f"1. Generating Substrate: 2D Torus ({width}x{height}) for a "
           f"{display_width}x{display_height} display", 'cyan', attrs=['bold'])
    return geometry

# --- FACTORY ---

class GeometryFactory:
    @staticmethod
    def create(geometry_type: str, params: dict) -> GridGeometry:
        if geometry_type == 'torus':
            return generate_torus_geometry(
                display_width=params.get('display_width', 960),
                display_height=params.get('display_height', 540),
                target_cell_size=params.get('target_cell_size', 12)
            )
        else:
            raise ValueError(f"Unknown geometry type: '{geometry_type}'")
