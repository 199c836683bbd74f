''' Functions for computing closed-shell Hartree-Fock and MP2 energies
    from molecular orbital integrals.

    All functions take the dense two-electron tensor in physicist
    notation, eri[p,q,r,s] = <pq|rs>, as returned by
    hfmp2.eri.build_eri, and assume orbitals below `nocc` are doubly
    occupied.
'''

import numpy as np

from hfmp2 import util
from hfmp2.util import types


def energy_1body(h1e, nocc):
    ''' Calculates the one-electron contribution to the HF energy,
        2 * sum_i h[i,i] over the occupied orbitals.

    Parameters
    ----------
    h1e : (n,n) array
        one-electron core Hamiltonian in the MO basis
    nocc : int
        number of doubly occupied orbitals

    Returns
    -------
    e1b : float
        one-electron energy
    '''

    e1b = 0.0

    for i in range(nocc):
        e1b += float(h1e[i,i])

    return 2.0 * e1b


def energy_2body(eri, nocc):
    ''' Calculates the two-electron contribution to the HF energy,
        sum_ij 2 <ij|ij> - <ij|ji> over the occupied orbitals.

    Parameters
    ----------
    eri : (n,n,n,n) array
        two-electron integrals <pq|rs>
    nocc : int
        number of doubly occupied orbitals

    Returns
    -------
    e2b : float
        two-electron energy
    '''

    e2b = 0.0

    for i in range(nocc):
        for j in range(nocc):
            e2b += 2.0 * float(eri[i,j,i,j]) - float(eri[i,j,j,i])

    return e2b


def energy_hf(e_nuc, e_1body, e_2body):
    ''' Total HF energy from its nuclear, one- and two-electron parts.
    '''

    return e_nuc + e_1body + e_2body


def _energy_mp2_loop(eri, e, nocc):
    nmo = len(e)
    e_mp2 = 0.0

    for i in range(nocc):
        for j in range(nocc):
            for a in range(nocc, nmo):
                for b in range(nocc, nmo):
                    denom = e[i] + e[j] - e[a] - e[b]

                    if denom != 0:
                        e_mp2 += float(eri[i,j,a,b])**2 / denom

    return e_mp2


def _energy_mp2_einsum(eri, e, nocc):
    eo, ev = e[:nocc], e[nocc:]

    denom = util.outer_sum([eo, eo, -ev, -ev])
    num = eri[:nocc,:nocc,nocc:,nocc:]**2

    mask = denom != 0
    t = np.divide(num, denom, out=np.zeros_like(num), where=mask)

    return float(np.sum(t))


def energy_mp2(eri, e, nocc, algorithm='loop'):
    ''' Calculates the MP2 correlation energy,

            sum_ijab <ij|ab>^2 / (e_i + e_j - e_a - e_b)

        for occupied i,j and virtual a,b. Terms with a denominator of
        exactly zero are skipped. For the closed-shell case this is the
        opposite-spin part of the MP2 energy.

    Parameters
    ----------
    eri : (n,n,n,n) array
        two-electron integrals <pq|rs>
    e : (n) array
        MO energies
    nocc : int
        number of doubly occupied orbitals
    algorithm : str, optional
        'loop' sums term by term in the order i, j, a, b; 'einsum'
        uses vectorised numpy and agrees up to rounding, default
        'loop'

    Returns
    -------
    e_mp2 : float
        MP2 correlation energy
    '''

    e = np.asarray(e, dtype=types.float64)

    if algorithm == 'loop':
        return _energy_mp2_loop(eri, e.tolist(), nocc)
    elif algorithm == 'einsum':
        return _energy_mp2_einsum(eri, e, nocc)
    else:
        raise ValueError('Unknown MP2 algorithm %r, expected \'loop\' or '
                         '\'einsum\'.' % algorithm)


def orbital_energies(h1e, eri, nocc):
    ''' Calculates canonical MO energies as the diagonal of the Fock
        matrix,

            e_p = h[p,p] + sum_i 2 <pi|pi> - <pi|ip>

    Parameters
    ----------
    h1e : (n,n) array
        one-electron core Hamiltonian in the MO basis
    eri : (n,n,n,n) array
        two-electron integrals <pq|rs>
    nocc : int
        number of doubly occupied orbitals

    Returns
    -------
    e : (n) ndarray
        MO energies
    '''

    o = slice(None, nocc)

    e = np.diag(h1e).astype(types.float64)
    e += 2.0 * util.einsum('pipi->p', eri[:,o,:,o])
    e -= util.einsum('piip->p', eri[:,o,o,:])

    return e
