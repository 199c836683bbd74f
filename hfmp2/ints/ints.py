''' Integrals class
'''

import numpy as np
from pyscf import ao2mo

from hfmp2 import util
from hfmp2.util import types
from hfmp2.eri import sparse_from_dense
from hfmp2.ints import readers


class Integrals:
    ''' Molecular orbital integrals of a closed-shell system, with the
        two-electron integrals held as a sparse list of symmetry-unique
        records in physicist notation <ij|kl>.

    Parameters
    ----------
    e_nuc : float
        nuclear repulsion energy
    nocc : int
        number of doubly occupied orbitals
    nmo : int
        number of molecular orbitals
    h1e : (nmo,nmo) array
        one-electron core Hamiltonian
    eri_idx : (n,4) array
        orbital indices of each two-electron integral
    eri_val : (n,) array
        value of each two-electron integral
    mo_energy : (nmo,) array, optional
        MO energies, default None (derived from the integrals when
        needed)
    path : str, optional
        file the integrals were read from
    fmt : str, optional
        format of `path`

    Attributes
    ----------
    nvir : int
        number of virtual orbitals
    nelec : int
        number of electrons
    neri : int
        number of two-electron integral records

    Raises
    ------
    ValueError
        inconsistent dimensions or indices out of range
    '''

    def __init__(self, e_nuc, nocc, nmo, h1e, eri_idx, eri_val,
                 mo_energy=None, path=None, fmt=None):
        self.e_nuc = float(e_nuc)
        self.nocc = int(nocc)
        self.nmo = int(nmo)
        self.h1e = np.asarray(h1e, dtype=types.float64)
        self.eri_idx = np.asarray(eri_idx, dtype=types.int32).reshape(-1, 4)
        self.eri_val = np.asarray(eri_val, dtype=types.float64).ravel()
        self.path = path
        self.fmt = fmt

        if mo_energy is not None:
            mo_energy = np.asarray(mo_energy, dtype=types.float64).ravel()
        self.mo_energy = mo_energy

        self.check()


    def check(self):
        ''' Checks that the dimensions of the integrals are consistent.
        '''

        nmo = self.nmo

        if nmo < 0 or not (0 <= self.nocc <= nmo):
            raise ValueError('Invalid orbital counts: nocc=%d, nmo=%d.'
                             % (self.nocc, nmo))

        if self.h1e.size != nmo * nmo:
            raise ValueError('One-electron integrals have shape %s, expected '
                             '(%d, %d).' % (self.h1e.shape, nmo, nmo))
        self.h1e = self.h1e.reshape(nmo, nmo)

        if self.eri_idx.shape[0] != self.eri_val.size:
            raise ValueError('%d index tuples given for %d two-electron '
                             'integrals.' % (self.eri_idx.shape[0], self.eri_val.size))

        if self.neri and (self.eri_idx.min() < 0 or self.eri_idx.max() >= nmo):
            raise ValueError('Two-electron integral indices outside [0, %d).' % nmo)

        if self.mo_energy is not None and self.mo_energy.size != nmo:
            raise ValueError('%d MO energies given for %d orbitals.'
                             % (self.mo_energy.size, nmo))


    @property
    def nvir(self):
        return self.nmo - self.nocc

    @property
    def nelec(self):
        return 2 * self.nocc

    @property
    def neri(self):
        return self.eri_val.size


    @classmethod
    def from_trexio(cls, path, buffer_size=None, verbose=1):
        ''' Builds the Integrals object from a TREXIO file, see
            hfmp2.ints.readers.read_trexio.
        '''

        data = readers.read_trexio(path, buffer_size=buffer_size, verbose=verbose)

        return cls(path=path, fmt='trexio', **data)

    @classmethod
    def from_fcidump(cls, path, tol=1e-12, verbose=1):
        ''' Builds the Integrals object from an FCIDUMP file, see
            hfmp2.ints.readers.read_fcidump.
        '''

        data = readers.read_fcidump(path, tol=tol, verbose=verbose)

        return cls(path=path, fmt='fcidump', **data)

    @classmethod
    def from_pyscf(cls, hf, tol=1e-12):
        ''' Builds the Integrals object from a converged pyscf.scf.hf.RHF
            object.

        Parameters
        ----------
        hf : pyscf.scf.hf.RHF
            Hartree-Fock object
        tol : float, optional
            two-electron integrals with an absolute value at or below
            this are dropped, default 1e-12

        Returns
        -------
        ints : Integrals
            integrals in the basis of `hf.mo_coeff`
        '''

        c = np.asarray(hf.mo_coeff)

        if c.ndim != 2 or hf.mol.nelec[0] != hf.mol.nelec[1]:
            raise ValueError('Integrals.from_pyscf requires a closed-shell '
                             'restricted calculation.')

        nmo = c.shape[1]

        h1e = util.einsum('pq,pi,qj->ij', hf.get_hcore(), c, c)

        eri = ao2mo.restore(1, ao2mo.kernel(hf.mol, c), nmo)
        eri_idx, eri_val = sparse_from_dense(eri.transpose(0, 2, 1, 3), tol=tol)

        return cls(hf.energy_nuc(), hf.mol.nelec[0], nmo, h1e, eri_idx, eri_val,
                   mo_energy=hf.mo_energy, fmt='pyscf')


def load(path, fmt='auto', verbose=1, **kwargs):
    ''' Reads an Integrals object from a file.

    Parameters
    ----------
    path : str
        path to the integral file
    fmt : str, optional
        'trexio', 'fcidump' or 'auto' to guess from the file, default
        'auto'
    verbose : int, optional
        print an acknowledgement for each stage, default 1

    See Integrals.from_trexio and Integrals.from_fcidump for
    additional keyword arguments

    Returns
    -------
    ints : Integrals
        integrals
    '''

    readers._check_path(path)

    if fmt == 'auto':
        fmt = readers.detect_format(path)

    if fmt == 'trexio':
        return Integrals.from_trexio(path, verbose=verbose, **kwargs)
    elif fmt == 'fcidump':
        return Integrals.from_fcidump(path, verbose=verbose, **kwargs)
    else:
        raise ValueError('Unknown integral file format %r.' % fmt)
