''' Class to compute closed-shell Hartree-Fock and MP2 energies from
    precomputed molecular orbital integrals.
'''

from hfmp2 import util, eri, energy, ints
from hfmp2.util import log


def _set_options(options, **kwargs):
    options.update({ 'verbose' : 1,
                     'algorithm' : 'loop',
                     'check_conflicts' : False,
                     'max_memory' : None,
    })

    for key,val in kwargs.items():
        if key not in options.keys():
            raise ValueError('%s argument invalid.' % key)

    options.update(kwargs)

    if options['algorithm'] not in ('loop', 'einsum'):
        raise ValueError('algorithm must be \'loop\' or \'einsum\', got %r.'
                         % options['algorithm'])

    return options


class MP2:
    ''' Hartree-Fock and second-order Moller-Plesset energies of a
        closed-shell system, evaluated once from fixed orbitals.

    Parameters
    ----------
    ints : Integrals
        molecular orbital integrals
    verbose : int, optional
        output level, 0 for silent, default 1
    algorithm : str, optional
        MP2 summation {'loop', 'einsum'}, see
        hfmp2.energy.energy_mp2, default 'loop'
    check_conflicts : bool, optional
        warn if two-electron records overlap with different values,
        default False
    max_memory : float, optional
        maximum size of the dense two-electron tensor in MB, default
        None (no limit)

    Attributes
    ----------
    ints : Integrals
        molecular orbital integrals
    options : dict
        dictionary of options
    eri : (n,n,n,n) ndarray
        dense two-electron integrals <pq|rs>, available after setup
    mo_energy : (n) ndarray
        MO energies, read or derived from the Fock diagonal
    e_nuc : float
        nuclear repulsion energy
    e_1body : float
        one-electron contribution to the HF energy
    e_2body : float
        two-electron contribution to the HF energy
    e_hf : float
        Hartree-Fock energy
    e_mp2 : float
        MP2 correlation energy
    e_corr : float
        correlation energy, equal to `e_mp2`
    e_tot : float
        total energy i.e. `e_hf` + `e_corr`

    Methods
    -------
    setup()
        builds the dense two-electron tensor and the MO energies
    run()
        runs the calculation
    '''

    def __init__(self, ints, **kwargs):
        self.ints = ints
        self._timer = util.Timer()
        self._timings = {}
        self._energies = {}

        self.options = _set_options({}, **kwargs)

        self.eri = None
        self.mo_energy = None


    @util.record_time('build')
    def setup(self):
        log.title('Options', self.verbose)
        log.options(self.options, self.verbose)
        log.title('Input', self.verbose)
        log.integrals(self.ints, self.verbose)

        self.eri = eri.build_eri(self.nmo,
                                 self.ints.eri_idx,
                                 self.ints.eri_val,
                                 max_memory=self.options['max_memory'],
                                 check_conflicts=self.options['check_conflicts'])

        log.write('ERI tensor = %.1f MB, sparsity = %.4f\n'
                  % (eri.eri_memory(self.nmo), util.sparsity(self.eri)), self.verbose)

        if self.ints.mo_energy is None:
            self.mo_energy = energy.orbital_energies(self.ints.h1e, self.eri, self.nocc)
            log.write('MO energies taken from the Fock diagonal.\n', self.verbose)
        else:
            self.mo_energy = self.ints.mo_energy

        log.array(self.mo_energy, 'MO energies', self.verbose)


    @util.record_time('energy')
    @util.record_energy('1b')
    def energy_1body(self):
        e1b = energy.energy_1body(self.ints.h1e, self.nocc)

        log.write('One-electron contribution: %f\n' % e1b, self.verbose)

        return e1b

    @util.record_time('energy')
    @util.record_energy('2b')
    def energy_2body(self):
        e2b = energy.energy_2body(self.eri, self.nocc)

        log.write('Two-electron contribution: %f\n' % e2b, self.verbose)

        return e2b

    @util.record_time('energy')
    @util.record_energy('hf')
    def energy_hf(self):
        ehf = energy.energy_hf(self.e_nuc, self.e_1body, self.e_2body)

        log.write('Hartree-Fock Energy: %f\n' % ehf, self.verbose)

        return ehf

    @util.record_time('mp2')
    @util.record_energy('mp2')
    def energy_mp2(self):
        emp2 = energy.energy_mp2(self.eri, self.mo_energy, self.nocc,
                                 algorithm=self.options['algorithm'])

        log.write('MP2 Energy: %f\n' % emp2, self.verbose)

        return emp2


    def run(self):
        self.setup()

        log.title('Energies', self.verbose)

        self.energy_1body()
        self.energy_2body()
        self.energy_hf()
        self.energy_mp2()

        log.title('Summary', self.verbose)
        log.energies(dict(self._energies, nuc=self.e_nuc, tot=self.e_tot), self.verbose)

        self._timings['total'] = self._timings.get('total', 0.0) + self._timer.total()
        log.title('Timings', self.verbose)
        log.timings(self._timings, self.verbose)

        return self


    @classmethod
    def from_file(cls, path, fmt='auto', **kwargs):
        ''' Reads the integrals from a file and builds the MP2 object.

        Parameters
        ----------
        path : str
            path to a TREXIO or FCIDUMP file
        fmt : str, optional
            file format {'auto', 'trexio', 'fcidump'}, default 'auto'

        See MP2 for additional keyword arguments

        Returns
        -------
        mp2 : MP2
            MP2 object, not yet run
        '''

        timer = util.Timer()
        integrals = ints.load(path, fmt=fmt, verbose=kwargs.get('verbose', 1))

        mp2 = cls(integrals, **kwargs)
        mp2._timings['load'] = timer.total()

        return mp2


    @property
    def nmo(self):
        return self.ints.nmo

    @property
    def nocc(self):
        return self.ints.nocc

    @property
    def nvir(self):
        return self.ints.nvir

    @property
    def e_nuc(self):
        return self.ints.e_nuc

    @property
    def e_1body(self):
        return self._energies['1b'][-1]

    @property
    def e_2body(self):
        return self._energies['2b'][-1]

    @property
    def e_hf(self):
        return self._energies['hf'][-1]

    @property
    def e_mp2(self):
        return self._energies['mp2'][-1]

    @property
    def e_corr(self):
        return self.e_mp2

    @property
    def e_tot(self):
        return self.e_hf + self.e_corr


    @property
    def verbose(self):
        return self.options['verbose']

    @verbose.setter
    def verbose(self, val):
        self.options['verbose'] = val
