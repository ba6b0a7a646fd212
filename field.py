# field.py v2.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v2.0: "Split Components"
# - The order parameter psi = re + i*im is stored as two flat float arrays,
#   row-major, idx(x, y) = y*width + x.
# - A second pair of arrays holds the next time step. The solver swaps the
#   pairs by reference after every step, nothing is copied.

import numpy as np
from termcolor import cprint

class ComplexGridField:
    """
    A complex scalar field on a width x height torus, with a double buffer.

    Attributes:
        re, im (np.ndarray): Current real and imaginary parts, shape (width*height,).
        re_next, im_next (np.ndarray): Write targets for the next solver step.
        width, height (int): Grid size in cells.
    """
    def __init__(self, width: int, height: int, rng: np.random.Generator = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.allocate(width, height)

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def allocate(self, width: int, height: int):
        """
        Replaces all four arrays with zeroed arrays of width*height cells.
        Old content is discarded.
        """
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        if width > np.iinfo(np.intp).max // height:
            raise ValueError(f"Grid of {width}x{height} cells cannot be indexed on this platform.")

        size = width * height
        self.width = width
        self.height = height
        self.re = np.zeros(size, dtype=np.float64)
        self.im = np.zeros(size, dtype=np.float64)
        self.re_next = np.zeros(size, dtype=np.float64)
        self.im_next = np.zeros(size, dtype=np.float64)
        cprint(f"  > Field allocated: {self.__class__.__name__} ({width}x{height} = {size} cells)", 'grey')

    def seed(self, rng: np.random.Generator = None):
        """
        Fills the field with a "hot" random state: uniform phase, magnitude in [0.1, 0.2].
        The magnitude is far below the equilibrium value of 1, so the reaction
        term grows it over time.
        """
        rng = rng if rng is not None else self.rng
        angle = rng.uniform(0.0, 2.0 * np.pi, self.num_cells)
        mag = 0.1 + rng.random(self.num_cells) * 0.1
        self.re[:] = mag * np.cos(angle)
        self.im[:] = mag * np.sin(angle)

    def swap_buffers(self):
        """Exchanges current and next arrays."""
        self.re, self.re_next = self.re_next, self.re
        self.im, self.im_next = self.im_next, self.im

    def grid_view(self, values: np.ndarray) -> np.ndarray:
        """A (height, width) view onto one of the flat buffers."""
        return values.reshape(self.height, self.width)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def magnitude(self) -> np.ndarray:
        return np.hypot(self.re, self.im)

    def phase(self) -> np.ndarray:
        return np.arctan2(self.im, self.re)

    def as_complex(self) -> np.ndarray:
        """Returns a (height, width) complex copy of the current state."""
        return self.grid_view(self.re + 1j * self.im)

    def load_complex(self, psi: np.ndarray):
        """Writes a complex array of width*height values into the current buffer."""
        psi = np.asarray(psi, dtype=np.complex128).ravel()
        if psi.size != self.num_cells:
            raise ValueError(f"Expected {self.num_cells} values, got {psi.size}.")
        self.re[:] = psi.real
        self.im[:] = psi.imag
