# initial_conditions.py v17.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v17.0: "Field Preparation"
# - Generators no longer create fields, they prepare an already allocated
#   ComplexGridField in place. Reallocation belongs to the resize path.
# - HotSoupState is the default start: the field's own random seed.

from abc import ABC, abstractmethod
import numpy as np
from termcolor import cprint

from field import ComplexGridField
from defects import imprint_vortex

class BaseInitialState(ABC):
    """
    Abstract base class for all initial state generators.
    Enforces the contract that a generator writes a full state into the field.
    """
    @abstractmethod
    def generate(self, field: ComplexGridField) -> ComplexGridField:
        """
        Overwrites the current buffer of `field` and returns it.
        """
        raise NotImplementedError

class HotSoupState(BaseInitialState):
    """
    Random phase everywhere, small magnitude in [0.1, 0.2].
    Represents a "hot", disordered start that cools toward |psi| = 1.
    """
    def __init__(self, rng: np.random.Generator = None):
        cprint(f"   -> IC Strategy: Hot Soup", 'cyan')
        self.rng = rng

    def generate(self, field: ComplexGridField) -> ComplexGridField:
        field.seed(self.rng)
        return field

class UniformState(BaseInitialState):
    """
    A uniform field of given magnitude and phase. With magnitude 1 this is the
    equilibrium: the Laplacian and the reaction term both vanish.
    """
    def __init__(self, magnitude: float = 1.0, phase: float = 0.0):
        cprint(f"   -> IC Strategy: Uniform (|psi|={magnitude}, phase={phase:.3f})", 'cyan')
        self.magnitude = magnitude
        self.phase = phase

    def generate(self, field: ComplexGridField) -> ComplexGridField:
        field.re[:] = self.magnitude * np.cos(self.phase)
        field.im[:] = self.magnitude * np.sin(self.phase)
        return field

class VortexState(BaseInitialState):
    """
    A cold uniform vacuum with one imprinted defect.
    The position is given as a fraction of the grid extent.
    """
    def __init__(self, position_ratio=(0.5, 0.5), winding: int = 1):
        cprint(f"   -> IC Strategy: Single Vortex (winding {winding:+d})", 'cyan')
        self.position_ratio = np.array(position_ratio, dtype=float)
        self.winding = winding

    def generate(self, field: ComplexGridField) -> ComplexGridField:
        field.re[:] = 1.0
        field.im[:] = 0.0
        cx = field.width * self.position_ratio[0]
        cy = field.height * self.position_ratio[1]
        imprint_vortex(field, cx, cy, self.winding)
        return field

class InitialStateFactory:
    @staticmethod
    def create(name: str, params: dict = None) -> BaseInitialState:
        params = params or {}
        if name == 'soup':
            return HotSoupState(rng=params.get('rng'))
        elif name == 'uniform':
            return UniformState(magnitude=params.get('magnitude', 1.0), phase=params.get('phase', 0.0))
        elif name == 'vortex':
            return VortexState(position_ratio=params.get('position_ratio', (0.5, 0.5)),
                               winding=params.get('winding', 1))
        else:
            raise ValueError(f"Unknown initial condition: '{name}'")
