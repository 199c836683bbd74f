import unittest
import numpy as np
from pyscf import gto, scf, ao2mo

from hfmp2 import eri, energy, util


class KnownValues(unittest.TestCase):

    @classmethod
    def setUpClass(self):
        import warnings
        warnings.simplefilter('ignore', FutureWarning)
        self.m = gto.M(atom='O 0 0 0; H 0 0 1; H 0 1 0', basis='sto-3g', verbose=0)
        self.rhf = scf.RHF(self.m)
        self.rhf.conv_tol = 1e-12
        self.rhf.conv_tol_grad = 1e-10
        self.rhf.run()
        c = self.rhf.mo_coeff
        self.nmo = c.shape[1]
        self.nocc = self.m.nelec[0]
        self.h1e = util.einsum('pq,pi,qj->ij', self.rhf.get_hcore(), c, c)
        self.eri_chem = ao2mo.restore(1, ao2mo.kernel(self.m, c), self.nmo)
        self.eri_phys = eri.build_eri(self.nmo, *eri.sparse_from_dense(self.eri_chem.transpose(0, 2, 1, 3)))

    @classmethod
    def tearDownClass(self):
        del self.m, self.rhf, self.nmo, self.nocc, self.h1e, self.eri_chem, self.eri_phys

    def test_energy_1body(self):
        h1e = np.diag([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(energy.energy_1body(h1e, 2), 6.0)
        self.assertEqual(energy.energy_1body(h1e, 0), 0.0)

    def test_two_orbital(self):
        t = eri.build_eri(2, [[0, 0, 0, 0]], [0.3])
        h1e = np.array([[1.0, 0.0], [0.0, 2.0]])
        e1b = energy.energy_1body(h1e, 1)
        e2b = energy.energy_2body(t, 1)
        ehf = energy.energy_hf(0.5, e1b, e2b)
        emp2 = energy.energy_mp2(t, np.array([-0.4, 0.6]), 1)
        self.assertAlmostEqual(e1b, 2.0, 14)
        self.assertAlmostEqual(e2b, 0.3, 14)
        self.assertAlmostEqual(ehf, 2.8, 14)
        self.assertEqual(emp2, 0.0)

    def test_energy_hf(self):
        e1b = energy.energy_1body(self.h1e, self.nocc)
        e2b = energy.energy_2body(self.eri_phys, self.nocc)
        ehf = energy.energy_hf(self.rhf.energy_nuc(), e1b, e2b)
        self.assertEqual(ehf, self.rhf.energy_nuc() + e1b + e2b)
        self.assertAlmostEqual(ehf, self.rhf.e_tot, 8)

    def test_energy_2body(self):
        o = slice(None, self.nocc)
        j = util.einsum('iijj->', self.eri_chem[o,o,o,o])
        k = util.einsum('ijji->', self.eri_chem[o,o,o,o])
        self.assertAlmostEqual(energy.energy_2body(self.eri_phys, self.nocc), 2.0 * j - k, 10)

    def test_energy_mp2(self):
        o, v = slice(None, self.nocc), slice(self.nocc, None)
        e = self.rhf.mo_energy
        ovov = self.eri_chem[o,v,o,v]
        d = util.outer_sum([e[o], e[o], -e[v], -e[v]])
        e_os = util.einsum('iajb,iajb,ijab->', ovov, ovov, 1.0 / d)
        e1 = energy.energy_mp2(self.eri_phys, e, self.nocc, algorithm='loop')
        e2 = energy.energy_mp2(self.eri_phys, e, self.nocc, algorithm='einsum')
        self.assertLess(e1, 0.0)
        self.assertAlmostEqual(e1, e_os, 10)
        self.assertAlmostEqual(e1, e2, 12)

    def test_zero_denominator(self):
        t = eri.build_eri(2, [[0, 0, 1, 1]], [0.2])
        for algorithm in ['loop', 'einsum']:
            emp2 = energy.energy_mp2(t, np.array([0.5, 0.5]), 1, algorithm=algorithm)
            self.assertTrue(np.isfinite(emp2))
            self.assertEqual(emp2, 0.0)

    def test_partial_zero_denominator(self):
        t = eri.build_eri(3, [[0, 0, 1, 2], [0, 0, 1, 1]], [0.1, 0.5])
        e = np.array([0.0, 0.0, 1.0])
        for algorithm in ['loop', 'einsum']:
            emp2 = energy.energy_mp2(t, e, 1, algorithm=algorithm)
            self.assertAlmostEqual(emp2, -0.02, 14)

    def test_no_virtuals(self):
        t = eri.build_eri(2, [[0, 1, 0, 1]], [0.2])
        for algorithm in ['loop', 'einsum']:
            self.assertEqual(energy.energy_mp2(t, np.array([-1.0, -0.5]), 2, algorithm=algorithm), 0.0)
            self.assertEqual(energy.energy_mp2(t, np.array([-1.0, -0.5]), 0, algorithm=algorithm), 0.0)

    def test_bad_algorithm(self):
        t = eri.build_eri(2, [[0, 0, 0, 0]], [0.3])
        with self.assertRaises(ValueError):
            energy.energy_mp2(t, np.array([-0.4, 0.6]), 1, algorithm='dense')

    def test_orbital_energies(self):
        e = energy.orbital_energies(self.h1e, self.eri_phys, self.nocc)
        self.assertAlmostEqual(np.max(np.absolute(e - self.rhf.mo_energy)), 0, 6)
        t = eri.build_eri(2, [[0, 0, 0, 0]], [0.3])
        e = energy.orbital_energies(np.array([[1.0, 0.0], [0.0, 2.0]]), t, 1)
        self.assertAlmostEqual(e[0], 1.3, 14)
        self.assertAlmostEqual(e[1], 2.0, 14)


if __name__ == '__main__':
    unittest.main()
