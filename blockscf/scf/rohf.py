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
Restricted Open-shell Hartree-Fock
'''

import numpy
from blockscf.lib import logger
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedVector
from blockscf.scf import hf


def get_roothaan_fock(focka_mo, fockb_mo, docc, socc):
    '''Roothaan's effective fock in the basis of the current orbitals.

    ======== ======== ====== =========
    space     closed   open   virtual
    ======== ======== ====== =========
    closed      Fc      Fb     Fc
    open        Fb      Fc     Fa
    virtual     Fc      Fa     Fc
    ======== ======== ====== =========

    where Fc stands for (Fa + Fb) / 2.  Within each irrep the first docc
    orbitals are closed, the next socc orbitals open, the rest virtual.

    Args:
        focka_mo, fockb_mo : BlockedMatrix
            Alpha and beta Fock matrices transformed by the current orbitals.
        docc, socc : per-irrep numbers of doubly and singly occupied orbitals

    Returns:
        Roothaan effective Fock matrix, symmetric in each block
    '''
    feff = (focka_mo + fockb_mo) * .5
    for h, f in enumerate(feff):
        nmo = f.shape[0]
        nd, ns = docc[h], socc[h]
        if nd + ns > nmo:
            raise ConfigurationError('Irrep %d has %d orbitals, cannot hold '
                                     'docc=%d socc=%d' % (h, nmo, nd, ns))
        if ns == 0:
            continue
        c = slice(0, nd)
        o = slice(nd, nd+ns)
        v = slice(nd+ns, nmo)
        f[o,c] = fockb_mo[h][o,c]
        f[c,o] = fockb_mo[h][o,c].T
        f[o,v] = focka_mo[h][o,v]
        f[v,o] = focka_mo[h][o,v].T
    return feff

make_rdm1 = hf.make_rdm1


class ROHF(hf.SCF):
    __doc__ = hf.SCF.__doc__ + '''
    Restricted open-shell (high-spin) Hartree-Fock.  The alpha and beta
    electrons share one set of orbitals; the orbital energies are the
    eigenvalues of Roothaan's effective Fock matrix.
    '''

    def check_config(self):
        if self.system.spin < 0:
            raise ConfigurationError('ROHF requires nalpha >= nbeta, spin = %d'
                                     % self.system.spin)
        return hf.SCF.check_config(self)

    def get_effective_fock(self, focks, orbitals, occ):
        c = orbitals[0].mo_coeff
        docc, socc = occ
        return [get_roothaan_fock(focks[0].transform(c), focks[1].transform(c),
                                  docc, socc)]

    def get_spin_orbital_energies(self):
        '''Diagonals of the alpha and beta Fock matrices in the final
        orbitals.'''
        c = self.mo_coeff
        mo_ea = BlockedVector([numpy.diag(f) for f in self.focks[0].transform(c)])
        mo_eb = BlockedVector([numpy.diag(f) for f in self.focks[1].transform(c)])
        return mo_ea, mo_eb

    def analyze(self, verbose=None):
        hf.SCF.analyze(self, verbose)
        log = logger.new_logger(self, verbose)
        if log.verbose >= logger.INFO:
            mo_ea, mo_eb = self.get_spin_orbital_energies()
            irrep_name = self.system.irrep_name
            log.info('  ** MO energies of alpha and beta Fock **')
            for h, (ea, eb) in enumerate(zip(mo_ea, mo_eb)):
                for i in range(ea.size):
                    log.info('MO #%d (%s #%d), alpha e=%.15g beta e=%.15g',
                             i+hf.MO_BASE, irrep_name[h], i+hf.MO_BASE,
                             ea[i], eb[i])
        return self
