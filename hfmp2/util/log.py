''' Output stuff.
'''

import numpy as np
import sys
import warnings
from collections import OrderedDict


def warn(msg):
    warnings.warn('WARNING: %s' % msg)


def write(s, verbose=1):
    if verbose:
        sys.stdout.write(s)
        sys.stdout.flush()


def title(s, verbose=1):
    if verbose:
        n = len(s) + 2
        string = '\n'
        string += (' ' + '-' * n + ' ').center(32)
        string += '\n'
        string += ('  ' + s + '  ').center(32)
        string += '\n'
        string += (' ' + '-' * n + ' ').center(32)
        string += '\n\n'
        write(string)


def integrals(ints, verbose=1):
    ''' Prints a summary of an Integrals object.
    '''

    if verbose:
        s  = '-'*36 + '\n'
        s += ' %-22s %12s\n' % ('source', ints.fmt or '-')
        s += ' %-22s %12d\n' % ('mo orbitals', ints.nmo)
        s += ' %-22s %12d\n' % ('occupied orbitals', ints.nocc)
        s += ' %-22s %12d\n' % ('virtual orbitals', ints.nvir)
        s += ' %-22s %12d\n' % ('eri records', ints.neri)
        s += '-'*36 + '\n'

        write(s)


def options(opts, verbose=1):
    max_size = max([len(x) for x in opts.keys()])
    if verbose:
        for item in sorted(opts.items()):
            if item[0][0] != '_':
                write(('%-' + str(max_size) + 's : %-16s\n') % (item[0], item[1]))


def energies(energies, verbose=1):
    if verbose:
        ref = OrderedDict()
        ref['nuc']  = 'Nuclear Repulsion Energy'
        ref['1b']   = 'One-electron contribution'
        ref['2b']   = 'Two-electron contribution'
        ref['hf']   = 'Hartree-Fock Energy'
        ref['mp2']  = 'MP2 Energy'
        ref['tot']  = 'Total Energy'

        for key,val in ref.items():
            if key in energies.keys():
                e = energies[key]
                if isinstance(e, list):
                    e = e[-1]
                write('%-26s : %18.12f\n' % (val, e))


def timings(times, verbose=1):
    if verbose:
        ref = OrderedDict()
        ref['load']   = 'Load'
        ref['build']  = 'Build'
        ref['energy'] = 'Energy'
        ref['mp2']    = 'MP2'
        ref['total']  = 'Total'

        for key,val in ref.items():
            if key in times.keys():
                write('%-10s : %-10.3f\n' % (val, times[key]))


def array(arr, title, verbose=1):
    assert arr.ndim <= 2

    if arr.ndim == 1:
        arr = arr[None,:]

    if verbose > 1:
        with np.printoptions(precision=12, edgeitems=100, linewidth=200):
            line = '-' * (13 * arr.shape[1] + 1)

            s = '%s:\n' % title
            s += line + '\n'

            for i in range(arr.shape[0]):
                s += ' ' + ' '.join(['%12.6f' % x for x in arr[i,:]]) + ' \n'

            s += line + '\n'

            write(s)
