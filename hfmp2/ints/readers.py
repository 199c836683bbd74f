''' Readers for molecular orbital integral files.
'''

import os
import numpy as np
import trexio
from pyscf import ao2mo
from pyscf.tools import fcidump

from hfmp2.util import log, types
from hfmp2.eri import sparse_from_dense


def _check_path(path):
    if not os.path.exists(path):
        raise FileNotFoundError('Integral file %s does not exist.' % path)


def _read_trexio_eri(f, neri, buffer_size):
    idx_chunks = []
    val_chunks = []
    offset = 0

    while offset < neri:
        size = min(buffer_size, neri - offset)
        indices, values, nread, eof = trexio.read_mo_2e_int_eri(f, offset, size)

        idx_chunks.append(np.asarray(indices, dtype=types.int32).reshape(-1, 4)[:nread])
        val_chunks.append(np.asarray(values, dtype=types.float64).ravel()[:nread])

        offset += nread

        if eof or nread == 0:
            break

    if offset != neri:
        raise ValueError('Read %d of %d two-electron integrals.' % (offset, neri))

    if not idx_chunks:
        return np.zeros((0, 4), dtype=types.int32), np.zeros((0,), dtype=types.float64)

    return np.concatenate(idx_chunks), np.concatenate(val_chunks)


def read_trexio(path, buffer_size=None, verbose=1):
    ''' Reads the integrals of a closed-shell system from a TREXIO file.

    Parameters
    ----------
    path : str
        path to the TREXIO file (HDF5 file or text directory)
    buffer_size : int, optional
        number of two-electron integrals read per chunk, default None
        (read all at once)
    verbose : int, optional
        print an acknowledgement for each stage, default 1

    Returns
    -------
    data : dict
        keys 'e_nuc', 'nocc', 'nmo', 'h1e', 'eri_idx', 'eri_val' and
        'mo_energy' (None if the file has no MO energies)

    Raises
    ------
    FileNotFoundError
        `path` does not exist
    ValueError
        the file is missing data or cannot be read
    '''

    _check_path(path)

    try:
        f = trexio.File(path, mode='r', back_end=trexio.TREXIO_AUTO)
    except trexio.Error as e:
        raise ValueError('Error opening file %s: %s' % (path, e)) from e

    try:
        e_nuc = float(trexio.read_nucleus_repulsion(f))
        log.write('Nuclear Repulsion Energy: %f\n' % e_nuc, verbose)

        nocc = int(trexio.read_electron_up_num(f))
        log.write('Number of Occupied Orbitals: %d\n' % nocc, verbose)

        nmo = int(trexio.read_mo_num(f))

        h1e = np.asarray(trexio.read_mo_1e_int_core_hamiltonian(f), dtype=types.float64)
        h1e = h1e.reshape(nmo, nmo)
        log.write('One-electron integrals read successfully.\n', verbose)

        neri = int(trexio.read_mo_2e_int_eri_size(f))
        eri_idx, eri_val = _read_trexio_eri(f, neri, buffer_size or max(neri, 1))
        log.write('Two-electron integrals read successfully.\n', verbose)

        if trexio.has_mo_energy(f):
            mo_energy = np.asarray(trexio.read_mo_energy(f), dtype=types.float64)
            log.write('Orbital energies read successfully.\n', verbose)
        else:
            mo_energy = None

    except trexio.Error as e:
        raise ValueError('Error reading file %s: %s' % (path, e)) from e

    finally:
        f.close()

    return dict(e_nuc=e_nuc, nocc=nocc, nmo=nmo, h1e=h1e,
                eri_idx=eri_idx, eri_val=eri_val, mo_energy=mo_energy)


def read_fcidump(path, tol=1e-12, verbose=1):
    ''' Reads the integrals of a closed-shell system from an FCIDUMP
        file. Two-electron integrals are converted from chemist to
        physicist notation, <ik|jl> = (ij|kl).

    Parameters
    ----------
    path : str
        path to the FCIDUMP file
    tol : float, optional
        two-electron integrals with an absolute value at or below this
        are dropped, default 1e-12
    verbose : int, optional
        print an acknowledgement for each stage, default 1

    Returns
    -------
    data : dict
        see read_trexio, 'mo_energy' is always None

    Raises
    ------
    FileNotFoundError
        `path` does not exist
    ValueError
        the file is malformed or describes an open-shell system
    '''

    _check_path(path)

    try:
        result = fcidump.read(path, verbose=False)
    except (IndexError, KeyError, ValueError) as e:
        raise ValueError('Error reading FCIDUMP file %s: %s' % (path, e)) from e

    if 'NELEC' not in result:
        raise ValueError('FCIDUMP file %s has no NELEC entry.' % path)

    nmo = int(result['NORB'])
    nelec = int(result['NELEC'])

    if result.get('MS2', 0) != 0 or nelec % 2:
        raise ValueError('%s describes an open-shell system (NELEC=%d, MS2=%d).'
                         % (path, nelec, result.get('MS2', 0)))

    # no core line means no core energy
    e_nuc = float(result.get('ECORE', 0.0))
    log.write('Nuclear Repulsion Energy: %f\n' % e_nuc, verbose)

    nocc = nelec // 2
    log.write('Number of Occupied Orbitals: %d\n' % nocc, verbose)

    h1e = np.asarray(result['H1'], dtype=types.float64).reshape(nmo, nmo)
    log.write('One-electron integrals read successfully.\n', verbose)

    eri = ao2mo.restore(1, np.asarray(result['H2']), nmo)
    eri_idx, eri_val = sparse_from_dense(eri.transpose(0, 2, 1, 3), tol=tol)
    log.write('Two-electron integrals read successfully.\n', verbose)

    return dict(e_nuc=e_nuc, nocc=nocc, nmo=nmo, h1e=h1e,
                eri_idx=eri_idx, eri_val=eri_val, mo_energy=None)


def detect_format(path):
    ''' Guesses the format of an integral file, 'fcidump' or 'trexio'.
    '''

    if os.path.isdir(path):
        return 'trexio'

    if 'fcidump' in os.path.basename(path).lower():
        return 'fcidump'

    with open(path, 'rb') as f:
        head = f.read(16).lstrip()

    if head[:4].upper() == b'&FCI':
        return 'fcidump'

    return 'trexio'
