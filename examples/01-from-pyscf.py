# Computes the HF and MP2 energies from the MO integrals of a pyscf calculation

from pyscf import gto, scf
from hfmp2 import ints, mp
from hfmp2.util import Timer

timer = Timer()


# Run the RHF calculation in pyscf:
m = gto.M(atom='O 0 0 0; H 0 0 1; H 0 1 0', basis='cc-pvdz', verbose=0)
rhf = scf.RHF(m).run()

# Build the Integrals object, this transforms the integrals to the MO
# basis and packs the two-electron integrals into symmetry-unique records:
integrals = ints.Integrals.from_pyscf(rhf)

# Evaluate the energies, the einsum algorithm is much faster than the
# term by term loop for larger basis sets:
mp2 = mp.MP2(integrals, algorithm='einsum', verbose=0).run()

print('E(hf)  = %.12f' % mp2.e_hf)
print('E(hf)  = %.12f (pyscf)' % rhf.e_tot)
print('E(mp2) = %.12f' % mp2.e_mp2)


print('time elapsed: %s' % timer.format_total())
