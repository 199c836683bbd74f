# Writes an FCIDUMP file with pyscf and reads it back

import os
import tempfile
from pyscf import gto, scf
from pyscf.tools import fcidump
from hfmp2 import mp
from hfmp2.util import Timer

timer = Timer()


m = gto.M(atom='H 0 0 0; Li 0 0 1.64', basis='6-31g', verbose=0)
rhf = scf.RHF(m).run()

path = os.path.join(tempfile.mkdtemp(), 'lih.fcidump')
fcidump.from_scf(rhf, path)

# FCIDUMP files hold no MO energies, so they are taken from the diagonal
# of the Fock matrix built from the integrals:
mp2 = mp.MP2.from_file(path, check_conflicts=True).run()

print('E(hf) = %.12f (pyscf)' % rhf.e_tot)
print('max |e - e(pyscf)| = %.3e' % abs(mp2.mo_energy - rhf.mo_energy).max())


print('time elapsed: %s' % timer.format_total())
