''' Command line interface:

        hfmp2 [options] FILE

    FILE is resolved relative to --data-dir, which defaults to the
    HFMP2_DATA_DIR environment variable or the working directory.
'''

import argparse
import os
import sys

from hfmp2 import mp


def get_parser():
    parser = argparse.ArgumentParser(
        prog='hfmp2',
        description='Hartree-Fock and MP2 energies from molecular orbital '
                    'integrals stored in a TREXIO or FCIDUMP file.')

    parser.add_argument('file',
                        help='integral file, relative to the data directory')
    parser.add_argument('--data-dir', default=None,
                        help='directory containing FILE (default: '
                             '$HFMP2_DATA_DIR or the working directory)')
    parser.add_argument('--format', dest='fmt', default='auto',
                        choices=['auto', 'trexio', 'fcidump'],
                        help='file format (default: auto)')
    parser.add_argument('--algorithm', default='loop',
                        choices=['loop', 'einsum'],
                        help='MP2 summation (default: loop)')
    parser.add_argument('--max-memory', type=float, default=None,
                        help='maximum size of the ERI tensor in MB')
    parser.add_argument('--debug', action='store_true',
                        help='warn about conflicting two-electron integrals')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='only print the final energies')

    return parser


def resolve_path(fname, data_dir=None):
    if data_dir is None:
        data_dir = os.environ.get('HFMP2_DATA_DIR', os.getcwd())

    return os.path.join(data_dir, fname)


def main(argv=None):
    args = get_parser().parse_args(argv)

    path = resolve_path(args.file, args.data_dir)
    verbose = 0 if args.quiet else 1

    try:
        mp2 = mp.MP2.from_file(path,
                               fmt=args.fmt,
                               verbose=verbose,
                               algorithm=args.algorithm,
                               max_memory=args.max_memory,
                               check_conflicts=args.debug)
        mp2.run()
    except (OSError, ValueError, MemoryError) as e:
        sys.stderr.write('Error: %s\n' % e)
        return 1

    if args.quiet:
        sys.stdout.write('One-electron contribution: %f\n' % mp2.e_1body)
        sys.stdout.write('Two-electron contribution: %f\n' % mp2.e_2body)
        sys.stdout.write('Hartree-Fock Energy: %f\n' % mp2.e_hf)
        sys.stdout.write('MP2 Energy: %f\n' % mp2.e_mp2)

    return 0


if __name__ == '__main__':
    sys.exit(main())
