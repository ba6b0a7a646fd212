# test_defects.py v1.0
# Unit tests for vortex imprinting on the torus.

import unittest
import numpy as np
from termcolor import cprint

from field import ComplexGridField
from initial_conditions import UniformState
from defects import imprint_vortex, soft_core_profile
from analytics import plaquette_charges, net_charge

class TestImprintVortex(unittest.TestCase):

    def setUp(self):
        cprint(f"\n--- Running test: {self._testMethodName} ---", 'yellow')
        self.field = ComplexGridField(4, 4)
        UniformState(magnitude=1.0, phase=0.0).generate(self.field)

    def test_01_core_suppression_scenario(self):
        """4x4 uniform field, winding +1 at (2, 2): the center cell drops to 0.2."""
        cprint("  -> Testing soft core at the defect center...", 'cyan')
        pre = self.field.magnitude().copy()
        imprint_vortex(self.field, 2, 2, 1)
        mag = self.field.grid_view(self.field.magnitude())

        self.assertLessEqual(mag[2, 2], 0.2 * pre[self.field.index(2, 2)] + 1e-12)
        self.assertAlmostEqual(mag[2, 2], 0.2)
        cprint("Test Passed: Center magnitude is suppressed.", 'green')

    def test_02_far_cells_follow_the_profile(self):
        """Magnitude away from the center is the soft profile of the torus distance."""
        imprint_vortex(self.field, 2, 2, 1)
        mag = self.field.grid_view(self.field.magnitude())

        # (0, 0) is sqrt(8) away from (2, 2) on a 4x4 torus
        expected = 0.2 + 0.8 * np.tanh(np.sqrt(8) / 4)
        self.assertAlmostEqual(mag[0, 0], expected)
        self.assertGreater(mag[0, 0], mag[2, 2])
        self.assertGreater(mag[0, 0], mag[2, 3])

    def test_03_soft_profile_shape(self):
        profile = soft_core_profile(np.array([0.0, 2.0, 4.0, 40.0]))
        self.assertAlmostEqual(profile[0], 0.2)
        self.assertTrue(np.all(np.diff(profile) >= 0))
        self.assertAlmostEqual(profile[2], 0.2 + 0.8 * np.tanh(1.0))
        self.assertAlmostEqual(profile[3], profile[2])

    def test_04_phase_follows_the_angle(self):
        """On a phase-0 field, the new phase is winding * atan2(dy, dx)."""
        field = ComplexGridField(12, 10)
        UniformState().generate(field)
        imprint_vortex(field, 6.0, 5.0, 1)
        phase = field.grid_view(field.phase())

        self.assertAlmostEqual(phase[5, 9], 0.0)              # dx=+3
        self.assertAlmostEqual(phase[8, 6], np.pi / 2)        # dy=+3
        self.assertAlmostEqual(phase[2, 6], -np.pi / 2)       # dy=-3
        self.assertAlmostEqual(abs(phase[5, 3]), np.pi)       # dx=-3

        field2 = ComplexGridField(12, 10)
        UniformState().generate(field2)
        imprint_vortex(field2, 6.0, 5.0, -1)
        self.assertAlmostEqual(field2.grid_view(field2.phase())[8, 6], -np.pi / 2)

    def test_05_annihilation(self):
        """+1 then -1 at the same spot restores the phase; magnitude only keeps the profile squared."""
        cprint("  -> Testing +1/-1 annihilation...", 'cyan')
        field = ComplexGridField(16, 16)
        UniformState(magnitude=1.0, phase=0.4).generate(field)
        pre_phase = field.phase().copy()

        imprint_vortex(field, 7.3, 8.6, 1)
        imprint_vortex(field, 7.3, 8.6, -1)

        phase_error = np.angle(np.exp(1j * (field.phase() - pre_phase)))
        self.assertTrue(np.allclose(phase_error, 0.0, atol=1e-9))

        ys, xs = np.mgrid[0:16, 0:16]
        dx, dy = xs - 7.3, ys - 8.6
        dx = np.where(dx > 8, dx - 16, np.where(dx < -8, dx + 16, dx))
        dy = np.where(dy > 8, dy - 16, np.where(dy < -8, dy + 16, dy))
        expected = soft_core_profile(np.hypot(dx, dy)).ravel() ** 2
        self.assertTrue(np.allclose(field.magnitude(), expected))
        self.assertEqual(len(np.nonzero(plaquette_charges(field))[0]), 0)
        cprint("Test Passed: The pair annihilates.", 'green')

    def test_06_creates_unit_charge(self):
        """The plaquette around the center carries the winding; the torus total is zero."""
        field = ComplexGridField(20, 20)
        UniformState().generate(field)
        imprint_vortex(field, 10.5, 10.5, 1)

        charges = plaquette_charges(field)
        self.assertEqual(charges[10, 10], 1)
        self.assertEqual(net_charge(field), 0)

    def test_07_wrapped_center_is_equivalent(self):
        field_a = ComplexGridField(9, 7)
        field_b = ComplexGridField(9, 7)
        UniformState(phase=1.0).generate(field_a)
        UniformState(phase=1.0).generate(field_b)
        imprint_vortex(field_a, 2.5, 3.25, 1)
        imprint_vortex(field_b, 2.5 - 18, 3.25 + 7, 1)
        self.assertTrue(np.allclose(field_a.re, field_b.re))
        self.assertTrue(np.allclose(field_a.im, field_b.im))

    def test_08_rejects_zero_winding(self):
        with self.assertRaises(ValueError):
            imprint_vortex(self.field, 1, 1, 0)
        with self.assertRaises(ValueError):
            imprint_vortex(self.field, 1, 1, 0.5)

if __name__ == "__main__":
    unittest.main(verbosity=2)
