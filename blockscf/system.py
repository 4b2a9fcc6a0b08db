#!/usr/bin/env python
# Copyright 2014-2020 The PySCF Developers. All Rights Reserved.
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
Input of an SCF calculation

The integrals, the symmetry blocking and the electron count are produced
elsewhere (an integral package, a point-group module).  :class:`System`
collects them in the form the SCF objects consume.
'''

import sys
import numpy
from blockscf import lib
from blockscf.lib import logger
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix, orthogonalizer
from blockscf import __config__

LINDEP = getattr(__config__, 'system_lindep', 1e-8)


def as_blocked(mat, name=None):
    '''Convert a 2D array (one irrep) or a list of 2D arrays to BlockedMatrix'''
    if mat is None or isinstance(mat, BlockedMatrix):
        return mat
    if isinstance(mat, numpy.ndarray) and mat.ndim == 2:
        return BlockedMatrix([mat], name)
    return BlockedMatrix(list(mat), name)


class System(lib.StreamObject):
    '''Symmetry-blocked one-electron operators, the two-electron J/K
    collaborator and the electron count.

    Attributes:
        hcore : BlockedMatrix
            Core Hamiltonian in the symmetry-adapted basis.
        ovlp : BlockedMatrix
            Overlap matrix.  Used to build the orthogonalizer when orth is
            not given.
        orth : BlockedMatrix
            Orthogonalizer X with X^T S X = 1.
        jk : callable
            ``jk(dma, dmb, mo_coeff_a, mo_coeff_b, (nalphapi, nbetapi))``
            returns the blocked Coulomb matrix of dma+dmb and the two
            exchange matrices ``(vj, vk_alpha, vk_beta)``.
        nelectron : int
        spin : int
            Number of unpaired electrons, 2S = nalpha - nbeta.
        enuc : float
            Nuclear repulsion energy.
        irrep_name : list of str
    '''

    verbose = getattr(__config__, 'VERBOSE', logger.NOTE)

    _keys = {'hcore', 'ovlp', 'orth', 'jk', 'nelectron', 'spin', 'enuc',
             'irrep_name', 'lindep'}

    def __init__(self, hcore, ovlp=None, jk=None, nelectron=None, spin=0,
                 energy_nuc=0., orth=None, irrep_name=None,
                 verbose=None, stdout=sys.stdout):
        self.hcore = as_blocked(hcore, 'Core Hamiltonian')
        self.ovlp = as_blocked(ovlp, 'Overlap')
        self.orth = as_blocked(orth, 'Orthogonalizer')
        self.jk = jk
        self.nelectron = nelectron
        self.spin = spin
        self.enuc = energy_nuc
        self.lindep = LINDEP
        if irrep_name is None:
            if self.hcore.nirrep == 1:
                irrep_name = ['A']
            else:
                irrep_name = ['irrep%d' % h for h in range(self.hcore.nirrep)]
        self.irrep_name = list(irrep_name)
        if verbose is not None:
            self.verbose = verbose
        self.stdout = stdout

    @property
    def nirrep(self):
        return self.hcore.nirrep

    @property
    def nsopi(self):
        '''Number of symmetry-adapted basis functions per irrep'''
        return self.hcore.rowdims

    @property
    def nelec(self):
        '''(nalpha, nbeta)'''
        if self.nelectron is None:
            raise ConfigurationError('System.nelectron is not set')
        nalpha = (self.nelectron + self.spin) // 2
        nbeta = self.nelectron - nalpha
        return nalpha, nbeta

    def energy_nuc(self):
        return self.enuc

    def get_hcore(self):
        return self.hcore

    def get_ovlp(self):
        if self.ovlp is None:
            return BlockedMatrix.identity(self.nsopi, 'Overlap')
        return self.ovlp

    def get_orth(self):
        '''Orthogonalizer, computed from the overlap matrix on first use'''
        if self.orth is None:
            self.orth = orthogonalizer(self.get_ovlp(), self.lindep)
            nmo = self.orth.coldims
            if numpy.any(nmo < self.nsopi):
                logger.info(self, 'Linear dependency removed, nmo per irrep %s '
                            '(nso %s)', nmo, self.nsopi)
        return self.orth

    def check(self):
        '''Raise ConfigurationError for inconsistent input'''
        if self.jk is None:
            raise ConfigurationError('System.jk, the J/K builder, is not set')
        if self.nelectron is None or self.nelectron < 0:
            raise ConfigurationError('Invalid number of electrons %s' % self.nelectron)
        if (self.nelectron + self.spin) % 2 != 0 or abs(self.spin) > self.nelectron:
            raise ConfigurationError('Electron number %d and spin %d (2S) are not '
                                     'consistent' % (self.nelectron, self.spin))
        if len(self.irrep_name) != self.nirrep:
            raise ConfigurationError('%d irrep names given for %d irreps'
                                     % (len(self.irrep_name), self.nirrep))
        hcore = self.hcore
        if numpy.any(hcore.rowdims != hcore.coldims):
            raise ConfigurationError('Core Hamiltonian blocks must be square')
        for m in (self.ovlp, self.orth):
            if m is not None and (m.nirrep != hcore.nirrep or
                                  numpy.any(m.rowdims != hcore.rowdims)):
                raise ConfigurationError('%s blocks %s do not match the core '
                                         'Hamiltonian blocks %s' %
                                         (m.name, m.rowdims, hcore.rowdims))
        nmo = self.get_orth().coldims.sum()
        if max(self.nelec) > nmo:
            raise ConfigurationError('%d orbitals cannot hold %s electrons'
                                     % (nmo, self.nelec))
        return self

    def dump_input(self, verbose=None):
        log = logger.new_logger(self, verbose)
        log.info('nelec = %s  spin (2S) = %d', self.nelec, self.spin)
        log.info('irreps = %s', ' '.join(self.irrep_name))
        log.info('nso per irrep = %s', self.nsopi)
        log.info('nuclear repulsion = %.15g', self.enuc)
        return self
