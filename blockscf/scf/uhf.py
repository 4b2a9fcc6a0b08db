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
Unrestricted Hartree-Fock

Occupations are the per-irrep electron counts ``(nalphapi, nbetapi)``.
'''

import numpy
from blockscf.lib import logger
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix
from blockscf.scf import hf


def make_rdm1(mo_coeff, nocc, out=None):
    '''One-spin density matrix sum_{m < nocc} C_m C_m^T'''
    if out is None:
        out = BlockedMatrix.zeros(mo_coeff.rowdims, name='Density matrix')
    for h, c in enumerate(mo_coeff):
        if nocc[h] > c.shape[1]:
            raise ConfigurationError('Irrep %d has %d orbitals, cannot hold %d '
                                     'electrons' % (h, c.shape[1], nocc[h]))
        c = c[:,:nocc[h]]
        out[h] = c.dot(c.T)
    return out


class UHF(hf.SCF):
    __doc__ = hf.SCF.__doc__ + '''
    Unrestricted Hartree-Fock.  Alpha and beta electrons have separate
    orbitals.  mo_coeff and mo_energy are (alpha, beta) pairs and
    irrep_occ takes (nalpha, nbeta) per irrep.
    '''

    @property
    def mo_coeff(self):
        return self.orbitals[0].mo_coeff, self.orbitals[1].mo_coeff

    @property
    def mo_energy(self):
        return self.orbitals[0].mo_energy, self.orbitals[1].mo_energy

    @property
    def nalphapi(self):
        return self.occ[0]

    @property
    def nbetapi(self):
        return self.occ[1]

    @property
    def docc(self):
        return numpy.minimum(self.occ[0], self.occ[1])

    @property
    def socc(self):
        return abs(self.occ[0] - self.occ[1])

    def _fixed_occ(self):
        pairs = hf._parse_irrep_occ(self.irrep_occ, self.system.irrep_name)
        nalphapi = numpy.array([p[0] for p in pairs])
        nbetapi = numpy.array([p[1] for p in pairs])
        nmo = self.system.get_orth().coldims
        if numpy.any(nalphapi > nmo) or numpy.any(nbetapi > nmo):
            raise ConfigurationError('irrep_occ nalpha %s nbeta %s exceeds the number '
                                     'of orbitals %s' % (nalphapi, nbetapi, nmo))
        if (nalphapi.sum(), nbetapi.sum()) != tuple(self.nelec):
            raise ConfigurationError('irrep_occ nalpha %s nbeta %s is inconsistent '
                                     'with nelec %s' % (nalphapi, nbetapi, self.nelec))
        return nalphapi, nbetapi

    def get_init_guess(self, mo_coeff0=None):
        '''Core Hamiltonian orbitals for both spins, or the (alpha, beta)
        pair of orbitals mo_coeff0.'''
        if mo_coeff0 is None:
            orb = hf.SCF.get_init_guess(self)[0]
            return [orb, orb.copy()]
        if (isinstance(mo_coeff0, BlockedMatrix) or
            (isinstance(mo_coeff0, numpy.ndarray) and mo_coeff0.ndim == 2)):
            mo_coeff0 = (mo_coeff0, mo_coeff0)
        return [hf.SCF.get_init_guess(self, c)[0] for c in mo_coeff0]

    def get_occ(self, orbitals):
        '''(nalphapi, nbetapi) filling the lowest orbitals of each spin, or
        :attr:`irrep_occ` if it is set.'''
        if self.irrep_occ is not None:
            return self._fixed_occ()
        nalpha, nbeta = self.nelec
        nalphapi = hf.select_occupation(orbitals[0].mo_energy, nalpha)[0]
        nbetapi = hf.select_occupation(orbitals[1].mo_energy, nbeta)[0]
        return nalphapi, nbetapi

    def spin_occupations(self, occ):
        return occ

    def orbital_classes(self, occ):
        '''0 for occupied, 2 for unoccupied orbitals of each spin'''
        nmo = self.system.get_orth().coldims
        classes = []
        for nocc in occ:
            cls = []
            for h, n in enumerate(nmo):
                c = numpy.full(n, 2, dtype=int)
                c[:nocc[h]] = 0
                cls.append(c)
            classes.append(cls)
        return classes

    def make_rdm1(self, orbitals, occ, out=None):
        if out is None:
            out = (None, None)
        dma = make_rdm1(orbitals[0].mo_coeff, occ[0], out[0])
        dmb = make_rdm1(orbitals[1].mo_coeff, occ[1], out[1])
        dma.name = 'Alpha density matrix'
        dmb.name = 'Beta density matrix'
        return dma, dmb

    def get_effective_fock(self, focks, orbitals, occ):
        return [focks[0].transform(orbitals[0].mo_coeff),
                focks[1].transform(orbitals[1].mo_coeff)]

    def dump_occ(self, occ, verbose=None):
        log = logger.new_logger(self, verbose)
        log.info('alpha occupation per irrep = %s', occ[0])
        log.info('beta  occupation per irrep = %s', occ[1])

    def spin_square(self):
        '''<S^2> and the multiplicity 2S+1 of the UHF determinant'''
        nalpha, nbeta = self.nelec
        ca, cb = self.mo_coeff
        s = self.system.get_ovlp()
        ssxy = 0
        for h in range(s.nirrep):
            ovlp = ca[h][:,:self.occ[0][h]].T.dot(s[h]).dot(cb[h][:,:self.occ[1][h]])
            ssxy += numpy.einsum('ij,ij->', ovlp, ovlp)
        sz = (nalpha - nbeta) * .5
        ss = sz**2 + (nalpha + nbeta) * .5 - ssxy
        s = numpy.sqrt(ss + .25) - .5
        return ss, s*2+1

    def analyze(self, verbose=None):
        log = logger.new_logger(self, verbose)
        irrep_name = self.system.irrep_name
        for label, nocc, e in zip(('alpha', 'beta'), self.occ, self.mo_energy):
            log.note('Final %s occupation = (%s)', label,
                     ' '.join('%2d %3s' % (n, irrep_name[h]) for h, n in enumerate(nocc)))
            hf._dump_mo_energy(log, e, nocc, numpy.zeros_like(nocc), irrep_name,
                               title='%s ' % label.capitalize(),
                               labels=('Occupied', None, 'Unoccupied'))
        ss, mult = self.spin_square()
        log.note('S^2 = %.7f  2S+1 = %.7f', ss, mult)
        return self
