#!/usr/bin/env python
# Copyright 2014-2018 The PySCF Developers. All Rights Reserved.
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

"""
DIIS for the SCF effective Fock matrix
"""

import numpy
from blockscf.lib import logger
from blockscf.lib import diis
from blockscf.symm.blocked import BlockedMatrix


class CDIIS(diis.DIIS):
    '''Commutator DIIS, P. Pulay, J. Comput. Chem. 3, 556 (1982).

    The trial vector is the effective Fock matrix transformed to the
    orthonormal basis.  The error vector is the orbital gradient, the
    couplings of the effective Fock matrix between orbitals of different
    occupation classes, in the same basis.  Vectors of different cycles
    thus share one basis and can be combined.

    Channels (alpha and beta orbitals of UHF) are concatenated into one
    vector.
    '''
    def __init__(self, mf=None, filename=None, storage=None):
        diis.DIIS.__init__(self, mf, filename, storage)
        self.space = 8

    def update(self, feff, orbitals, classes):
        '''Record the effective Fock matrices of the current cycle and
        extrapolate them.

        Args:
            feff : list of BlockedMatrix
                Effective Fock of each channel in the basis of the orbitals.
            orbitals : list of :class:`Orbitals`
            classes : list of list of int arrays
                Occupation class of each orbital, see
                :meth:`SCF.orbital_classes`.

        Returns:
            feff : list of BlockedMatrix
                The extrapolated effective Fock in the basis of the orbitals,
                or the input if extrapolation was not possible.
            extrapolated : bool
        '''
        f_orth = get_orth_fock(feff, orbitals)
        err = get_err_vec(feff, orbitals, classes)
        logger.debug1(self, 'diis-norm(errvec)=%g', numpy.linalg.norm(err.ravel()))
        self.record(f_orth, err)
        if not self.extrapolate(f_orth):
            return feff, False
        nirrep = feff[0].nirrep
        feff = []
        for i, orb in enumerate(orbitals):
            f = BlockedMatrix(f_orth.blocks[i*nirrep:(i+1)*nirrep])
            feff.append(f.transform(orb.orth_coeff))
        return feff, True


def get_orth_fock(feff, orbitals):
    '''U Feff U^T of all channels, concatenated in one BlockedMatrix'''
    blocks = []
    for f, orb in zip(feff, orbitals):
        blocks.extend(f.back_transform(orb.orth_coeff).blocks)
    return BlockedMatrix(blocks, 'Orthonormal-basis Fock')

def get_err_vec(feff, orbitals, classes):
    '''Orbital gradient U G U^T, where G keeps the elements of Feff which
    couple orbitals of different occupation classes.'''
    blocks = []
    for f, orb, cls in zip(feff, orbitals, classes):
        g = BlockedMatrix([numpy.where(c[:,None] != c, fh, 0)
                           for fh, c in zip(f, cls)])
        blocks.extend(g.back_transform(orb.orth_coeff).blocks)
    return BlockedMatrix(blocks, 'Orbital gradient')
