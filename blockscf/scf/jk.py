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
Coulomb and exchange matrices from an in-core ERI tensor.

This is the reference implementation of the J/K collaborator consumed by the
SCF objects.  Production integral engines supply their own callable with the
same signature.
'''

import numpy
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix, symmetrize_matrix


def dot_eri_dm(eri, dm):
    '''Compute J, K matrices in terms of the given 2-electron integrals and
    density matrix:

    J ~ numpy.einsum('ijkl,kl->ij', eri, dm)
    K ~ numpy.einsum('ijkl,jk->il', eri, dm)

    Args:
        eri : ndarray
            Two-electron integrals (ij|kl) in chemists' notation, shape
            (n,n,n,n) or (n*n,n*n).
        dm : ndarray
            Symmetric density matrix (n,n)
    '''
    n = dm.shape[0]
    eri = eri.reshape(n, n, n, n)
    vj = numpy.einsum('ijkl,kl->ij', eri, dm)
    vk = numpy.einsum('ijkl,jk->il', eri, dm)
    return vj, vk


class DenseJK:
    '''J/K builder for an ERI tensor held in memory.

    Args:
        eri : ndarray
            Two-electron integrals in the basis of the rows of symm_orb (the
            AO basis), or directly in the symmetry-adapted basis when the
            system has only one irrep and symm_orb is None.

    Kwargs:
        symm_orb : list of 2D arrays
            Symmetry-adapted basis functions of each irrep expanded in the
            basis of eri.

    Examples:

    >>> jk = DenseJK(mol.intor('int2e'), symm_orb=mol.symm_orb)
    >>> vj, vka, vkb = jk(dma, dmb)
    '''
    def __init__(self, eri, symm_orb=None):
        self.eri = numpy.asarray(eri)
        self.symm_orb = symm_orb

    def _to_ao(self, dm):
        if self.symm_orb is None:
            if dm.nirrep != 1:
                raise ConfigurationError('symm_orb is required for %d irreps'
                                         % dm.nirrep)
            return dm[0]
        return dm.to_ao(self.symm_orb)

    def _to_blocked(self, mat):
        if self.symm_orb is None:
            return BlockedMatrix([mat])
        return symmetrize_matrix(mat, self.symm_orb)

    def get_jk(self, dm):
        '''J and K of one blocked density matrix'''
        vj, vk = dot_eri_dm(self.eri, self._to_ao(dm))
        return self._to_blocked(vj), self._to_blocked(vk)

    def __call__(self, dma, dmb, mo_coeff_a=None, mo_coeff_b=None,
                 occupations=None):
        dma_ao = self._to_ao(dma)
        dmb_ao = self._to_ao(dmb)
        vj = self._to_blocked(dot_eri_dm(self.eri, dma_ao + dmb_ao)[0])
        vka = self._to_blocked(dot_eri_dm(self.eri, dma_ao)[1])
        if dmb is dma:
            vkb = vka
        else:
            vkb = self._to_blocked(dot_eri_dm(self.eri, dmb_ao)[1])
        return vj, vka, vkb
