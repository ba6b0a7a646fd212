# test_field.py v2.0
# Unit tests for ComplexGridField: allocation, seeding and the double buffer.

import unittest
import numpy as np
from termcolor import cprint

from field import ComplexGridField

class TestComplexGridField(unittest.TestCase):

    def setUp(self):
        cprint(f"\n--- Running test: {self._testMethodName} ---", 'yellow')
        self.rng = np.random.default_rng(1234)

    def test_01_allocate_shapes(self):
        """All four buffers have width*height zeroed cells."""
        field = ComplexGridField(7, 3, rng=self.rng)
        for arr in (field.re, field.im, field.re_next, field.im_next):
            self.assertEqual(arr.shape, (21,))
            self.assertTrue(np.all(arr == 0))
        self.assertEqual(field.num_cells, 21)

        field.allocate(5, 4)
        for arr in (field.re, field.im, field.re_next, field.im_next):
            self.assertEqual(arr.shape, (20,))
        cprint("Test Passed: Buffers are reallocated with the new size.", 'green')

    def test_02_allocate_rejects_bad_sizes(self):
        field = ComplexGridField(2, 2)
        with self.assertRaises(ValueError):
            field.allocate(0, 4)
        with self.assertRaises(ValueError):
            field.allocate(-3, 4)
        with self.assertRaises(ValueError):
            field.allocate(np.iinfo(np.intp).max, 4)
        # A failed request leaves the old buffers in place
        self.assertEqual(field.re.shape, (4,))

    def test_03_seed_ranges(self):
        """Seeded magnitudes lie in [0.1, 0.2] and phases cover the circle."""
        cprint("  -> Testing hot seed...", 'cyan')
        field = ComplexGridField(40, 30, rng=self.rng)
        field.seed()
        mag = field.magnitude()
        self.assertTrue(np.all(mag >= 0.1 - 1e-12))
        self.assertTrue(np.all(mag <= 0.2 + 1e-12))

        phase = field.phase()
        self.assertLess(phase.min(), -2.5)
        self.assertGreater(phase.max(), 2.5)
        self.assertGreater(len(np.unique(field.re)), 100)

        # Reseeding keeps the same arrays
        re_before = field.re
        field.seed()
        self.assertIs(field.re, re_before)

    def test_04_swap_is_by_reference(self):
        field = ComplexGridField(3, 3)
        re, im, re_next, im_next = field.re, field.im, field.re_next, field.im_next
        field.swap_buffers()
        self.assertIs(field.re, re_next)
        self.assertIs(field.im, im_next)
        self.assertIs(field.re_next, re)
        self.assertIs(field.im_next, im)

    def test_05_row_major_layout(self):
        """idx(x, y) = y*width + x, and grid_view is a view, not a copy."""
        field = ComplexGridField(4, 3)
        field.re[field.index(3, 1)] = 5.0
        view = field.grid_view(field.re)
        self.assertEqual(view.shape, (3, 4))
        self.assertEqual(view[1, 3], 5.0)
        view[2, 0] = -1.0
        self.assertEqual(field.re[8], -1.0)

    def test_06_complex_roundtrip(self):
        field = ComplexGridField(3, 2)
        psi = np.arange(6) + 1j * np.arange(6)[::-1]
        field.load_complex(psi)
        self.assertTrue(np.allclose(field.as_complex().ravel(), psi))
        with self.assertRaises(ValueError):
            field.load_complex(np.zeros(5))

if __name__ == "__main__":
    unittest.main(verbosity=2)
