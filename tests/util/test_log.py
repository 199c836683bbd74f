import unittest
import numpy as np
from io import StringIO
import sys

from hfmp2 import ints
from hfmp2.util import log


class KnownValues(unittest.TestCase):

    @classmethod
    def setUpClass(self):
        import warnings
        warnings.simplefilter('ignore', FutureWarning)
        self.ints = ints.Integrals(0.5, 1, 2, np.eye(2), [[0, 0, 0, 0]], [0.3])

    @classmethod
    def tearDownClass(self):
        del self.ints

    def _capture(self, func, *args, **kwargs):
        sys.stdout = stdout = StringIO()
        try:
            func(*args, **kwargs)
        finally:
            sys.stdout = sys.__stdout__
        return stdout.getvalue()

    def test_warn(self):
        with self.assertWarns(Warning):
            log.warn('This is a test')

    def test_write(self):
        self.assertEqual(self._capture(log.write, 'test\n'), 'test\n')
        self.assertEqual(self._capture(log.write, 'test\n', verbose=0), '')

    def test_title(self):
        self.assertIn('Test', self._capture(log.title, 'Test'))

    def test_integrals(self):
        out = self._capture(log.integrals, self.ints)
        self.assertIn('mo orbitals', out)
        self.assertIn('eri records', out)

    def test_options(self):
        out = self._capture(log.options, {'test': 'also a test', '_hidden': 1})
        self.assertIn('also a test', out)
        self.assertNotIn('_hidden', out)

    def test_energies(self):
        out = self._capture(log.energies, {'hf': [1.0, 2.5], 'nuc': 0.5})
        self.assertIn('Hartree-Fock Energy', out)
        self.assertIn('2.500000000000', out)
        self.assertNotIn('MP2', out)

    def test_timings(self):
        self.assertIn('Build', self._capture(log.timings, {'build': 0.0}))

    def test_array(self):
        self.assertEqual(self._capture(log.array, np.zeros((3, 3)), 'zeros'), '')
        self.assertIn('zeros', self._capture(log.array, np.zeros((3, 3)), 'zeros', verbose=2))


if __name__ == '__main__':
    unittest.main()
