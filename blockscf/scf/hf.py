#!/usr/bin/env python
# Copyright 2014-2019 The PySCF Developers. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

'''
Hartree-Fock SCF on symmetry-blocked matrices

The iteration (:func:`kernel`) is written once for all reference types.  A
reference type supplies three hooks:

* :meth:`SCF.get_fock`  alpha and beta Fock matrices from the densities
* :meth:`SCF.get_effective_fock`  the operator(s) diagonalized to obtain the
  next orbitals, in the basis of the current orbitals
* :meth:`SCF.make_rdm1`  alpha and beta densities from orbitals and
  occupations

Occupations of RHF and ROHF are the per-irrep counts ``(docc, socc)`` of
doubly and singly occupied orbitals.
'''

import collections
import threading
import numpy
from blockscf import lib
from blockscf.lib import logger
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix, BlockedVector
from blockscf.scf import diis
from blockscf import __config__

MO_BASE = getattr(__config__, 'MO_BASE', 1)


class SCFState:
    INIT = 'INIT'
    GUESS = 'GUESS'
    ITERATING = 'ITERATING'
    CONVERGED = 'CONVERGED'
    FAILED = 'FAILED'

CycleInfo = collections.namedtuple('CycleInfo',
                                   ['cycle', 'e_tot', 'delta_e', 'density_rms', 'diis'])


class Orbitals:
    '''Molecular orbitals of one spin channel.

    Attributes:
        mo_coeff : BlockedMatrix
            C, orbitals expanded in the symmetry-adapted basis.  Columns are
            ordered by increasing orbital energy within each irrep.
        orth_coeff : BlockedMatrix
            U, the same orbitals in the orthonormal basis, C = X U.
        mo_energy : BlockedVector
    '''
    def __init__(self, mo_coeff, orth_coeff, mo_energy):
        self.mo_coeff = mo_coeff
        self.orth_coeff = orth_coeff
        self.mo_energy = mo_energy

    def copy(self):
        return Orbitals(self.mo_coeff.copy(), self.orth_coeff.copy(),
                        self.mo_energy.copy())


class Wavefunction:
    '''SCF result handed to property and gradient code.

    For RHF and ROHF, mo_coeff and mo_energy are single blocked objects; for
    UHF they are (alpha, beta) pairs.
    '''
    def __init__(self, mf):
        self.e_tot = mf.e_tot
        self.converged = mf.converged
        self.mo_coeff = mf.mo_coeff
        self.mo_energy = mf.mo_energy
        self.docc = mf.docc.copy()
        self.socc = mf.socc.copy()
        self.nalphapi, self.nbetapi = [n.copy() for n in mf.spin_occupations(mf.occ)]
        self.focka, self.fockb = mf.focks
        self.dma, self.dmb = mf.dms
        self.feff = mf.feff
        self.trace = list(mf.trace)
        self.irrep_name = list(mf.system.irrep_name)


def select_occupation(mo_energy, ndocc, nsocc=0):
    '''Occupy the lowest ndocc orbitals doubly and the next nsocc orbitals
    singly, regardless of their irreps.

    The orbitals are sorted by energy with a stable sort; equal energies are
    ordered by irrep index, then by their position in the irrep.

    Args:
        mo_energy : BlockedVector
            Orbital energies, ascending within each irrep.

    Returns:
        docc, socc : per-irrep numbers of doubly and singly occupied orbitals
    '''
    nirrep = mo_energy.nirrep
    energies = mo_energy.ravel()
    irreps = mo_energy.irrep_labels()
    if ndocc < 0 or nsocc < 0:
        raise ConfigurationError('Negative occupation ndocc=%d nsocc=%d'
                                 % (ndocc, nsocc))
    if ndocc + nsocc > energies.size:
        raise ConfigurationError('Cannot occupy %d + %d orbitals, only %d available'
                                 % (ndocc, nsocc, energies.size))
    order = numpy.lexsort((irreps, energies))
    docc = numpy.bincount(irreps[order[:ndocc]], minlength=nirrep)
    socc = numpy.bincount(irreps[order[ndocc:ndocc+nsocc]], minlength=nirrep)
    return docc, socc

def make_rdm1(mo_coeff, docc, socc, out=None):
    '''Alpha and beta density matrices.

    Dbeta  = sum_{m < docc} C_m C_m^T
    Dalpha = Dbeta + sum_{docc <= m < docc+socc} C_m C_m^T

    Kwargs:
        out : (BlockedMatrix, BlockedMatrix)
            Overwritten in place if given.
    '''
    if out is None:
        dma = BlockedMatrix.zeros(mo_coeff.rowdims, name='Alpha density matrix')
        dmb = BlockedMatrix.zeros(mo_coeff.rowdims, name='Beta density matrix')
    else:
        dma, dmb = out
    for h, c in enumerate(mo_coeff):
        nd, ns = docc[h], socc[h]
        if nd + ns > c.shape[1]:
            raise ConfigurationError('Irrep %d has %d orbitals, cannot hold '
                                     'docc=%d socc=%d' % (h, c.shape[1], nd, ns))
        cd = c[:,:nd]
        co = c[:,nd:nd+ns]
        dmb[h] = cd.dot(cd.T)
        dma[h] = dmb[h] + co.dot(co.T)
    return dma, dmb

def energy_elec(dms, h1e, focks):
    '''Electronic energy 1/2 (Da.H + Db.H + Da.Fa + Db.Fb)'''
    dma, dmb = dms
    focka, fockb = focks
    e1 = dma.vector_dot(h1e) + dmb.vector_dot(h1e)
    e_coul = dma.vector_dot(focka) + dmb.vector_dot(fockb)
    return .5 * (e1 + e_coul)


def _rms(d):
    if isinstance(d, BlockedMatrix):
        return d.rms()
    d = numpy.asarray(d)
    if d.size == 0:
        return 0.
    return numpy.sqrt(numpy.mean(d**2))

class ConvergenceMonitor:
    '''Energy and density convergence test.  Both conditions must hold.

    Attributes:
        energy_diff : float
            Current minus previous energy.
        density_rms : float
            RMS over all elements of the change of the total density.
    '''
    def __init__(self, energy_threshold, density_threshold):
        if not energy_threshold > 0:
            raise ConfigurationError('Energy threshold must be positive, got %s'
                                     % energy_threshold)
        if not density_threshold > 0:
            raise ConfigurationError('Density threshold must be positive, got %s'
                                     % density_threshold)
        self.energy_threshold = energy_threshold
        self.density_threshold = density_threshold
        self.energy_diff = None
        self.density_rms = None

    def update(self, e_cur, e_prev, dm_cur, dm_prev):
        self.energy_diff = e_cur - e_prev
        self.density_rms = _rms(dm_cur - dm_prev)
        return self

    def converged(self):
        if self.energy_diff is None:
            return False
        return (abs(self.energy_diff) < self.energy_threshold and
                self.density_rms < self.density_threshold)


def _notify(mf, event, envs):
    if callable(mf.callback):
        mf.callback(event, envs)

def kernel(mf, conv_tol=None, conv_tol_density=None, mo_coeff0=None):
    '''SCF iteration: INIT -> GUESS -> ITERATING -> CONVERGED | FAILED

    Each cycle assembles the effective Fock from the Fock matrices of the
    current density, extrapolates it with DIIS, diagonalizes it, rotates the
    orbitals, reselects occupations, builds the new densities and their Fock
    matrices and energy, then tests convergence.

    Returns:
        e_tot : float
    '''
    cput0 = (logger.process_clock(), logger.perf_counter())
    if conv_tol is None: conv_tol = mf.conv_tol
    if conv_tol_density is None: conv_tol_density = mf.conv_tol_density
    log = logger.new_logger(mf)

    mf.state = SCFState.INIT
    mf.converged = False
    mf.trace = []
    mf.check_config()
    monitor = ConvergenceMonitor(conv_tol, conv_tol_density)
    mf._stop_event.clear()

    mf.state = SCFState.GUESS
    orbitals = mf.get_init_guess(mo_coeff0)
    occ = mf.get_occ(orbitals)
    dms = mf.make_rdm1(orbitals, occ)
    focks = mf.get_fock(dms, orbitals, occ)
    e_tot = mf.energy_tot(dms, focks)
    log.info('init E= %.15g', e_tot)
    mf.dump_occ(occ, log)
    _notify(mf, 'guess', locals())

    mf_diis = None
    if mf.diis:
        mf_diis = mf.DIIS(mf, mf.diis_file)
        mf_diis.space = mf.diis_space
        mf_diis.eviction = mf.diis_eviction

    mf.state = SCFState.ITERATING
    scf_conv = False
    stopped = False
    cput1 = cput0
    try:
        for cycle in range(1, mf.max_cycle+1):
            if mf._stop_event.is_set():
                log.warn('SCF stopped on request before cycle %d', cycle)
                stopped = True
                break

            feff = mf.get_effective_fock(focks, orbitals, occ)
            diis_used = False
            if mf_diis is not None and cycle >= mf.diis_start_cycle:
                feff, diis_used = mf_diis.update(feff, orbitals,
                                                 mf.orbital_classes(occ))
            orbitals = mf.eig(feff, orbitals)
            occ = mf.get_occ(orbitals)

            dms_last = dms
            last_hf_e = e_tot
            dms = mf.make_rdm1(orbitals, occ)
            focks = mf.get_fock(dms, orbitals, occ)
            e_tot = mf.energy_tot(dms, focks)
            monitor.update(e_tot, last_hf_e, mf.total_density(dms),
                           mf.total_density(dms_last))
            mf.trace.append(CycleInfo(cycle, e_tot, monitor.energy_diff,
                                      monitor.density_rms, diis_used))
            log.info('cycle= %d E= %.15g  delta_E= %4.3g  |ddm|= %4.3g%s',
                     cycle, e_tot, monitor.energy_diff, monitor.density_rms,
                     '' if diis_used else '  (no DIIS)')
            cput1 = log.timer('cycle= %d' % cycle, *cput1)
            _notify(mf, 'cycle', locals())
            if monitor.converged():
                scf_conv = True
                break
    finally:
        if mf_diis is not None:
            mf_diis.close()

    mf.converged = scf_conv
    mf.e_tot = e_tot
    mf.orbitals = orbitals
    mf.occ = occ
    mf.dms = dms
    mf.focks = focks
    mf.feff = mf.get_effective_fock(focks, orbitals, occ)
    if scf_conv:
        mf.state = SCFState.CONVERGED
    else:
        mf.state = SCFState.FAILED
        if not stopped:
            log.warn('SCF not converged in %d cycles', mf.max_cycle)
    mf.wfn = Wavefunction(mf)
    log.timer('scf_cycle', *cput0)
    mf.dump_energy(e_tot, scf_conv)
    _notify(mf, 'converged' if scf_conv else 'failed', locals())
    return e_tot


def _parse_irrep_occ(irrep_occ, irrep_name):
    '''Normalize an occupation override to a list of (n1, n2) pairs, one
    per irrep.  Accepts a dict keyed by irrep name or index, or a sequence
    of pairs.  Irreps missing from a dict get (0, 0).'''
    nirrep = len(irrep_name)
    if isinstance(irrep_occ, dict):
        pairs = [(0, 0)] * nirrep
        for key, val in irrep_occ.items():
            if lib.isinteger(key):
                h = key
            elif key in irrep_name:
                h = irrep_name.index(key)
            else:
                raise ConfigurationError('Irrep %s in irrep_occ is not defined. '
                                         'Irreps: %s' % (key, irrep_name))
            if not 0 <= h < nirrep:
                raise ConfigurationError('Irrep index %d out of range' % h)
            pairs[h] = val
    else:
        pairs = list(irrep_occ)
        if len(pairs) != nirrep:
            raise ConfigurationError('irrep_occ has %d entries for %d irreps'
                                     % (len(pairs), nirrep))
    out = []
    for pair in pairs:
        if len(pair) != 2 or not all(lib.isinteger(n) and n >= 0 for n in pair):
            raise ConfigurationError('irrep_occ entries must be pairs of '
                                     'non-negative integers, got %s' % (pair,))
        out.append((int(pair[0]), int(pair[1])))
    return out


class SCF(lib.StreamObject):
    '''SCF base class.  Concrete reference types: :class:`RHF`,
    :class:`blockscf.scf.rohf.ROHF`, :class:`blockscf.scf.uhf.UHF`.

    Attributes:
        verbose : int
            Print level.  Default value equals to :class:`System.verbose`
        conv_tol : float
            Energy convergence threshold.  Default is 1e-10
        conv_tol_density : float
            Threshold on the RMS change of the total density.  Default is 1e-8
        max_cycle : int
            Max number of SCF iterations.  Default is 50
        diis : bool
            Whether to accelerate the iterations with DIIS.  Default is True
        diis_space : int
            DIIS subspace size.  Default is 8
        diis_start_cycle : int
            The first cycle (1-based) which uses DIIS.  Default is 1
        diis_file : str
            HDF5 file to hold the DIIS history.  The history stays in memory
            if not given (and small enough).
        diis_eviction : str
            'oldest' or 'largest_error'
        irrep_occ : dict or list
            Fixed occupation per irrep, which turns off the aufbau selection.
            RHF/ROHF take (docc, socc) pairs, UHF (nalpha, nbeta) pairs,
            e.g. ``{'A1': (3, 0), 'B2': (0, 1)}``.
        callback : function(event, envs)
            Called with event 'guess', 'cycle', 'converged' or 'failed' and
            the local variables of :func:`kernel`.

    Saved results:
        state : str
        converged : bool
        e_tot : float
        mo_coeff, mo_energy : orbitals and orbital energies
        docc, socc : per-irrep occupations
        trace : list of :class:`CycleInfo`
        wfn : :class:`Wavefunction`
    '''
    DIIS = diis.CDIIS

    conv_tol = getattr(__config__, 'scf_hf_SCF_conv_tol', 1e-10)
    conv_tol_density = getattr(__config__, 'scf_hf_SCF_conv_tol_density', 1e-8)
    max_cycle = getattr(__config__, 'scf_hf_SCF_max_cycle', 50)
    diis = getattr(__config__, 'scf_hf_SCF_diis', True)
    diis_space = getattr(__config__, 'scf_hf_SCF_diis_space', 8)
    diis_start_cycle = getattr(__config__, 'scf_hf_SCF_diis_start_cycle', 1)
    diis_file = None
    diis_eviction = getattr(__config__, 'scf_hf_SCF_diis_eviction', 'oldest')
    irrep_occ = None
    callback = None

    _keys = {
        'system', 'conv_tol', 'conv_tol_density', 'max_cycle', 'diis',
        'diis_space', 'diis_start_cycle', 'diis_file', 'diis_eviction',
        'irrep_occ', 'callback', 'state', 'converged', 'e_tot', 'orbitals',
        'occ', 'dms', 'focks', 'feff', 'trace', 'wfn',
    }

    def __init__(self, system):
        self.system = system
        self.verbose = system.verbose
        self.stdout = system.stdout

##################################################
# don't modify the following attributes, they are not input options
        self.state = SCFState.INIT
        self.converged = False
        self.e_tot = 0
        self.orbitals = None
        self.occ = None
        self.dms = None
        self.focks = None
        self.feff = None
        self.trace = []
        self.wfn = None
        self._stop_event = threading.Event()

    @property
    def nelec(self):
        return self.system.nelec

    @property
    def mo_coeff_a(self):
        '''Alpha orbitals.  For RHF and ROHF this is the same object as
        :attr:`mo_coeff_b`; modifying one modifies the other.'''
        return self.orbitals[0].mo_coeff

    @property
    def mo_coeff_b(self):
        '''Beta orbitals.  For RHF and ROHF this is the same object as
        :attr:`mo_coeff_a`; modifying one modifies the other.'''
        return self.orbitals[-1].mo_coeff

    @property
    def mo_coeff(self):
        return self.orbitals[0].mo_coeff

    @property
    def mo_energy(self):
        return self.orbitals[0].mo_energy

    @property
    def docc(self):
        return self.occ[0]

    @property
    def socc(self):
        return self.occ[1]

    def stop(self):
        '''Ask a running kernel to stop.  The request is honored before the
        next cycle starts.'''
        self._stop_event.set()

    def dump_flags(self, verbose=None):
        log = logger.new_logger(self, verbose)
        log.info('\n')
        log.info('******** %s ********', self.__class__)
        log.info('method = %s', self.__class__.__name__)
        self.system.dump_input(log)
        if self.diis:
            log.info('DIIS = %s', self.DIIS)
            log.info('diis_start_cycle = %d', self.diis_start_cycle)
            log.info('diis_space = %d', self.diis_space)
            log.info('diis_eviction = %s', self.diis_eviction)
            if self.diis_file:
                log.info('diis_file = %s', self.diis_file)
        else:
            log.info('DIIS disabled')
        log.info('SCF conv_tol = %g', self.conv_tol)
        log.info('SCF conv_tol_density = %g', self.conv_tol_density)
        log.info('max. SCF cycles = %d', self.max_cycle)
        if self.irrep_occ is not None:
            log.info('irrep_occ %s', self.irrep_occ)
        return self

    def check_config(self):
        '''Raise ConfigurationError for invalid options or inputs'''
        if not self.conv_tol > 0:
            raise ConfigurationError('conv_tol must be positive, got %s' % self.conv_tol)
        if not self.conv_tol_density > 0:
            raise ConfigurationError('conv_tol_density must be positive, got %s'
                                     % self.conv_tol_density)
        if not lib.isinteger(self.max_cycle) or self.max_cycle < 1:
            raise ConfigurationError('max_cycle must be a positive integer, got %s'
                                     % self.max_cycle)
        if self.diis:
            if not lib.isinteger(self.diis_space) or self.diis_space < 1:
                raise ConfigurationError('diis_space must be a positive integer, '
                                         'got %s' % self.diis_space)
            if self.diis_eviction not in ('oldest', 'largest_error'):
                raise ConfigurationError('Unknown diis_eviction %s' % self.diis_eviction)
        self.system.check()
        if self.irrep_occ is not None:
            self._fixed_occ()
        return self

    def _fixed_occ(self):
        '''The irrep_occ override as (docc, socc) arrays, checked against the
        electron count and the orbital space of each irrep.'''
        pairs = _parse_irrep_occ(self.irrep_occ, self.system.irrep_name)
        docc = numpy.array([p[0] for p in pairs])
        socc = numpy.array([p[1] for p in pairs])
        nmo = self.system.get_orth().coldims
        if numpy.any(docc + socc > nmo):
            raise ConfigurationError('irrep_occ docc %s + socc %s exceeds the number '
                                     'of orbitals %s' % (docc, socc, nmo))
        nalpha, nbeta = self.nelec
        if docc.sum() != nbeta or socc.sum() != nalpha - nbeta:
            raise ConfigurationError('irrep_occ docc %s socc %s is inconsistent with '
                                     'nelec %s' % (docc, socc, self.nelec))
        return docc, socc

    def get_hcore(self):
        return self.system.get_hcore()

    def get_init_guess(self, mo_coeff0=None):
        '''Orbitals of the core Hamiltonian, or the supplied orbitals
        mo_coeff0 expressed in the orthonormal basis.

        The columns of mo_coeff0 are used in the given order within each
        irrep; their core Hamiltonian expectation values serve as orbital
        energies for the initial occupation.
        Each block of mo_coeff0 must have the shape of the orthogonalizer
        block, one column per linearly independent orbital.
        '''
        x = self.system.get_orth()
        h1e = self.get_hcore()
        if mo_coeff0 is None:
            e, u = h1e.transform(x).diagonalize()
            orb = Orbitals(x.dot(u), u, e)
        else:
            c = mo_coeff0
            if isinstance(c, numpy.ndarray) and c.ndim == 2:
                c = BlockedMatrix([c])
            elif not isinstance(c, BlockedMatrix):
                c = BlockedMatrix(list(c))
            if (c.nirrep != x.nirrep or numpy.any(c.rowdims != x.rowdims) or
                numpy.any(c.coldims != x.coldims)):
                raise ConfigurationError('mo_coeff0 blocks %s x %s do not match '
                                         'the orthogonalizer blocks %s x %s'
                                         % (c.rowdims, c.coldims,
                                            x.rowdims, x.coldims))
            u = x.T.dot(self.system.get_ovlp()).dot(c)
            e = BlockedVector([numpy.diag(m) for m in h1e.transform(c)])
            orb = Orbitals(x.dot(u), u, e)
        return [orb]

    def get_occ(self, orbitals):
        '''(docc, socc) per irrep from the orbital energies, or from
        :attr:`irrep_occ` if it is set.'''
        if self.irrep_occ is not None:
            return self._fixed_occ()
        nalpha, nbeta = self.nelec
        return select_occupation(orbitals[0].mo_energy, nbeta, nalpha - nbeta)

    def spin_occupations(self, occ):
        '''Number of alpha and beta electrons per irrep'''
        docc, socc = occ
        return docc + socc, docc

    def orbital_classes(self, occ):
        '''Occupation class of every orbital per channel and irrep: 0 for
        doubly occupied, 1 for singly occupied, 2 for unoccupied.'''
        docc, socc = occ
        nmo = self.system.get_orth().coldims
        classes = []
        for h, n in enumerate(nmo):
            cls = numpy.full(n, 2, dtype=int)
            cls[:docc[h]] = 0
            cls[docc[h]:docc[h]+socc[h]] = 1
            classes.append(cls)
        return [classes]

    def make_rdm1(self, orbitals, occ, out=None):
        docc, socc = occ
        return make_rdm1(orbitals[0].mo_coeff, docc, socc, out)

    def total_density(self, dms):
        return dms[0] + dms[1]

    def get_jk(self, dms, orbitals, occ):
        '''Coulomb matrix of the total density and the alpha and beta
        exchange matrices, from the J/K collaborator of the system.'''
        return self.system.jk(dms[0], dms[1], orbitals[0].mo_coeff,
                              orbitals[-1].mo_coeff, self.spin_occupations(occ))

    def get_veff(self, dms, orbitals, occ):
        '''Two-electron potentials Ga = J - Ka, Gb = J - Kb'''
        vj, vka, vkb = self.get_jk(dms, orbitals, occ)
        return vj - vka, vj - vkb

    def get_fock(self, dms, orbitals, occ):
        '''Fa = H + Ga, Fb = H + Gb'''
        h1e = self.get_hcore()
        vhfa, vhfb = self.get_veff(dms, orbitals, occ)
        return h1e + vhfa, h1e + vhfb

    def get_effective_fock(self, focks, orbitals, occ):
        raise NotImplementedError

    def eig(self, feff, orbitals):
        '''Diagonalize the effective Fock of each channel in the basis of
        the current orbitals and rotate the orbitals accordingly.'''
        new = []
        for f, orb in zip(feff, orbitals):
            e, w = f.diagonalize()
            new.append(Orbitals(orb.mo_coeff.dot(w), orb.orth_coeff.dot(w), e))
        return new

    def energy_elec(self, dms, focks):
        return energy_elec(dms, self.get_hcore(), focks)

    def energy_tot(self, dms, focks):
        return self.energy_elec(dms, focks) + self.system.energy_nuc()

    def dump_occ(self, occ, verbose=None):
        log = logger.new_logger(self, verbose)
        log.info('DOCC vector = %s', occ[0])
        log.info('SOCC vector = %s', occ[1])

    def dump_energy(self, e_tot, converged):
        if converged:
            logger.note(self, 'converged SCF energy = %.15g', e_tot)
        else:
            logger.note(self, 'SCF not converged.')
            logger.note(self, 'SCF energy = %.15g', e_tot)

    def scf(self, mo_coeff0=None):
        '''Run the SCF iteration.  Returns the total energy.'''
        self.check_sanity()
        self.dump_flags()
        return kernel(self, self.conv_tol, self.conv_tol_density,
                      mo_coeff0=mo_coeff0)

    def kernel(self, mo_coeff0=None):
        return self.scf(mo_coeff0)

    def analyze(self, verbose=None):
        '''Print the final occupations and the orbital energies grouped in
        doubly occupied, singly occupied and unoccupied orbitals.'''
        log = logger.new_logger(self, verbose)
        irrep_name = self.system.irrep_name
        docc, socc = self.docc, self.socc
        log.note('Final DOCC vector = (%s)', ' '.join('%2d %3s' % (n, irrep_name[h])
                                                     for h, n in enumerate(docc)))
        log.note('Final SOCC vector = (%s)', ' '.join('%2d %3s' % (n, irrep_name[h])
                                                     for h, n in enumerate(socc)))
        _dump_mo_energy(log, self.mo_energy, docc, socc, irrep_name)
        return self


def _dump_mo_energy(log, mo_energy, docc, socc, irrep_name, title='',
                    labels=('Doubly occupied', 'Singly occupied', 'Unoccupied')):
    groups = ([], [], [])
    for h, e in enumerate(mo_energy):
        for i, ei in enumerate(e):
            if i < docc[h]:
                groups[0].append((ei, h))
            elif i < docc[h] + socc[h]:
                groups[1].append((ei, h))
            else:
                groups[2].append((ei, h))
    log.note('%sOrbital energies (a.u.):', title)
    for label, orbs in zip(labels, groups):
        if not orbs:
            continue
        log.note('  %s orbitals', label)
        orbs.sort()
        for p0, p1 in lib.prange(0, len(orbs), lib.param.OUTPUT_COLS):
            log.note('    %s', '  '.join('%12.6f %3s' % (e, irrep_name[h])
                                          for e, h in orbs[p0:p1]))


class RHF(SCF):
    __doc__ = SCF.__doc__ + '''
    Restricted closed-shell Hartree-Fock.  System.spin must be 0.
    '''
    def check_config(self):
        if self.system.spin != 0:
            raise ConfigurationError('RHF requires a closed-shell system, spin = %d'
                                     % self.system.spin)
        return SCF.check_config(self)

    def make_rdm1(self, orbitals, occ, out=None):
        docc, socc = occ
        dma, dmb = make_rdm1(orbitals[0].mo_coeff, docc, socc, out)
        # identical alpha and beta densities, one exchange build suffices
        return dma, dma

    def get_effective_fock(self, focks, orbitals, occ):
        c = orbitals[0].mo_coeff
        return [((focks[0] + focks[1]) * .5).transform(c)]
