''' Routines for building the dense two-electron integral tensor from
    a sparse list of symmetry-unique records.

    Records are physicist-notation integrals <ij|kl> over real orbitals,
    each standing for the eight index tuples

        (i,j,k,l) (k,l,i,j) (i,l,k,j) (k,j,i,l)
        (j,i,l,k) (l,k,j,i) (j,k,l,i) (l,i,j,k)
'''

import numpy as np

from hfmp2.util import log, types


def idx(i, j, k, l, nmo):
    ''' Position of (i,j,k,l) in the flat buffer of an (nmo,)*4 tensor.
        Works elementwise on integer arrays.
    '''

    return ((i * nmo + j) * nmo + k) * nmo + l


def permutations(i, j, k, l):
    ''' Returns the eight index tuples equivalent to (i,j,k,l).
    '''

    return [(i, j, k, l), (k, l, i, j), (i, l, k, j), (k, j, i, l),
            (j, i, l, k), (l, k, j, i), (j, k, l, i), (l, i, j, k)]


def eri_memory(nmo):
    ''' Size of the dense (nmo,)*4 tensor in MB.
    '''

    return types.float64.nbytes(nmo**4) / 1e6


def _check_records(nmo, eri_idx, eri_val):
    eri_idx = np.asarray(eri_idx, dtype=types.int64).reshape(-1, 4)
    eri_val = np.asarray(eri_val, dtype=types.float64).ravel()

    if eri_idx.shape[0] != eri_val.size:
        raise ValueError('%d index tuples given for %d integral values.'
                         % (eri_idx.shape[0], eri_val.size))

    if eri_idx.size and (eri_idx.min() < 0 or eri_idx.max() >= nmo):
        bad = np.any((eri_idx < 0) | (eri_idx >= nmo), axis=1)
        n = np.flatnonzero(bad)[0]
        raise ValueError('Integral record %d has index %s outside [0, %d).'
                         % (n, tuple(eri_idx[n]), nmo))

    return eri_idx, eri_val


def _positions(nmo, eri_idx, eri_val):
    ''' Flat positions of every permutation of every record, in record
        order, along with the value written to each.
    '''

    i, j, k, l = eri_idx.T

    pos = np.stack([idx(*p, nmo) for p in permutations(i, j, k, l)], axis=1)
    val = np.repeat(eri_val, 8)

    return pos.ravel(), val


def find_conflicts(nmo, eri_idx, eri_val):
    ''' Finds tensor positions which are written by more than one
        record with different values.

    Parameters
    ----------
    nmo : int
        number of molecular orbitals
    eri_idx : (n,4) array
        orbital indices of each record
    eri_val : (n,) array
        value of each record

    Returns
    -------
    conflicts : ndarray
        sorted flat positions with conflicting values
    '''

    eri_idx, eri_val = _check_records(nmo, eri_idx, eri_val)
    pos, val = _positions(nmo, eri_idx, eri_val)

    if pos.size == 0:
        return np.zeros((0,), dtype=types.int64)

    uniq, inv = np.unique(pos, return_inverse=True)

    vmax = np.full(uniq.size, -np.inf)
    vmin = np.full(uniq.size, np.inf)
    np.maximum.at(vmax, inv, val)
    np.minimum.at(vmin, inv, val)

    return uniq[vmax != vmin]


def build_eri(nmo, eri_idx, eri_val, max_memory=None, check_conflicts=False):
    ''' Expands a sparse list of two-electron integrals into the dense
        tensor, writing each value at all eight symmetry-equivalent
        positions.

        When records overlap with different values the later record
        wins, where every permutation of record n is written before
        those of record n+1.

    Parameters
    ----------
    nmo : int
        number of molecular orbitals
    eri_idx : (n,4) array
        orbital indices (i,j,k,l) of each record
    eri_val : (n,) array
        value of each record
    max_memory : float, optional
        maximum size of the dense tensor in MB, default None (no limit)
    check_conflicts : bool, optional
        warn if overlapping records disagree, default False

    Returns
    -------
    eri : (nmo,nmo,nmo,nmo) ndarray
        dense tensor, a view of a single contiguous buffer

    Raises
    ------
    ValueError
        record indices outside [0, nmo) or mismatched input sizes
    MemoryError
        dense tensor larger than `max_memory`
    '''

    eri_idx, eri_val = _check_records(nmo, eri_idx, eri_val)

    if max_memory is not None and eri_memory(nmo) > max_memory:
        raise MemoryError('Dense ERI tensor for %d orbitals requires %.1f MB, '
                          'max_memory is %.1f MB.'
                          % (nmo, eri_memory(nmo), max_memory))

    buf = np.zeros((nmo**4,), dtype=types.float64)

    if eri_val.size:
        pos, val = _positions(nmo, eri_idx, eri_val)

        # last occurrence of each position
        uniq, first = np.unique(pos[::-1], return_index=True)
        buf[uniq] = val[::-1][first]

        if check_conflicts:
            conflicts = find_conflicts(nmo, eri_idx, eri_val)
            if conflicts.size:
                example = np.unravel_index(conflicts[0], (nmo,)*4)
                log.warn('%d ERI tensor elements are set by records with '
                         'different values, e.g. %s. Later records take '
                         'precedence.' % (conflicts.size, tuple(int(x) for x in example)))

    return buf.reshape((nmo,)*4)


def sparse_from_dense(eri, tol=1e-12):
    ''' Packs a dense tensor with the eight-fold symmetry of build_eri
        into one record per symmetry class, keeping the lexicographically
        smallest index tuple of each class.

    Parameters
    ----------
    eri : (n,n,n,n) array
        dense physicist-notation tensor
    tol : float, optional
        records with an absolute value at or below this are dropped,
        default 1e-12

    Returns
    -------
    eri_idx : (m,4) ndarray
        orbital indices of each record
    eri_val : (m,) ndarray
        value of each record
    '''

    eri = np.asarray(eri, dtype=types.float64)
    nmo = eri.shape[0]
    assert eri.shape == (nmo,)*4

    val = eri.ravel()
    pos = np.flatnonzero(np.absolute(val) > tol)
    i, j, k, l = np.unravel_index(pos, (nmo,)*4)

    pos_min = pos.copy()
    for p in permutations(i, j, k, l)[1:]:
        np.minimum(pos_min, idx(*p, nmo), out=pos_min)

    mask = pos == pos_min

    eri_idx = np.stack([i[mask], j[mask], k[mask], l[mask]], axis=1)
    eri_val = val[pos[mask]].copy()

    return eri_idx.astype(types.int32), eri_val
