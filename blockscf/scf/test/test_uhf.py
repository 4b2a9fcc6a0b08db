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
UHF on the diagonal Coulomb model of test_hf.py.  For 5 electrons,
2S = 1, the UHF and ROHF determinants coincide, E = -8.4 with
alpha orbital energies -1.9, -.9, -.2, 1.5 and beta orbital energies
-1.9, -.9, .3, 1.5.
'''

import os
import unittest
import numpy
import scipy.linalg
from blockscf import System, scf
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix, symmetrize_matrix
from blockscf.scf import uhf


def model_system(nelectron=5, spin=1, nirrep=1):
    jmat = numpy.full((4,4), .2)
    numpy.fill_diagonal(jmat, .5)
    a = numpy.eye(4)
    a[0,2] = .3
    a[2,0] = .2
    a[1,3] = .25
    a[3,1] = -.15
    s = a.T.dot(a)
    hcore = a.T.dot(numpy.diag([-3., -2., -1., .5])).dot(a)
    eri = numpy.einsum('ip,iq,kr,ks,ik->pqrs', a, a, a, a, jmat)
    if nirrep == 1:
        symm_orb = None
        blocked = [hcore], [s]
    else:
        symm_orb = [numpy.eye(4)[:,[0,2]], numpy.eye(4)[:,[1,3]]]
        blocked = symmetrize_matrix(hcore, symm_orb), symmetrize_matrix(s, symm_orb)
    system = System(blocked[0], ovlp=blocked[1],
                    jk=scf.jk.DenseJK(eri, symm_orb), nelectron=nelectron,
                    spin=spin, verbose=5, stdout=open(os.devnull, 'w'))
    return system, a

def setUpModule():
    global mf, mf_symm
    mf = scf.UHF(model_system()[0]).run()
    mf_symm = scf.UHF(model_system(nirrep=2)[0]).run()

def tearDownModule():
    global mf, mf_symm
    mf.stdout.close()
    mf_symm.stdout.close()
    del mf, mf_symm


class KnownValues(unittest.TestCase):
    def test_uhf(self):
        self.assertTrue(mf.converged)
        self.assertAlmostEqual(mf.e_tot, -8.4, 9)
        mo_ea, mo_eb = mf.mo_energy
        self.assertAlmostEqual(abs(mo_ea[0] - [-1.9, -.9, -.2, 1.5]).max(), 0, 8)
        self.assertAlmostEqual(abs(mo_eb[0] - [-1.9, -.9, .3, 1.5]).max(), 0, 8)
        self.assertEqual(mf.nalphapi.tolist(), [3])
        self.assertEqual(mf.nbetapi.tolist(), [2])

    def test_uhf_symm(self):
        self.assertAlmostEqual(mf_symm.e_tot, -8.4, 9)
        self.assertEqual(mf_symm.nalphapi.tolist(), [2, 1])
        self.assertEqual(mf_symm.nbetapi.tolist(), [1, 1])
        self.assertEqual(mf_symm.docc.tolist(), [1, 1])
        self.assertEqual(mf_symm.socc.tolist(), [1, 0])
        self.assertEqual(mf_symm.wfn.nalphapi.tolist(), [2, 1])

    def test_separate_orbitals(self):
        self.assertFalse(mf.mo_coeff_a is mf.mo_coeff_b)
        ca, cb = mf.mo_coeff
        self.assertTrue(ca is mf.mo_coeff_a)
        self.assertTrue(cb is mf.mo_coeff_b)

    def test_density(self):
        dma, dmb = mf_symm.dms
        s = mf_symm.system.get_ovlp()
        self.assertAlmostEqual(dma.vector_dot(s), 3, 10)
        self.assertAlmostEqual(dmb.vector_dot(s), 2, 10)

    def test_spin_square(self):
        ss, mult = mf.spin_square()
        self.assertAlmostEqual(ss, .75, 9)
        self.assertAlmostEqual(mult, 2, 9)

    def test_make_rdm1(self):
        c = BlockedMatrix([numpy.eye(3)])
        dm = uhf.make_rdm1(c, [2])
        self.assertEqual(dm[0].tolist(), [[1, 0, 0], [0, 1, 0], [0, 0, 0]])
        self.assertRaises(ConfigurationError, uhf.make_rdm1, c, [4])

    def test_perturbed_guess(self):
        system, a = model_system()
        kappa = numpy.zeros((4,4))
        kappa[1,2] = .1
        kappa[2,3] = -.2
        kappa = kappa - kappa.T
        c0 = BlockedMatrix([numpy.linalg.inv(a).dot(scipy.linalg.expm(kappa))])
        c1 = BlockedMatrix([numpy.linalg.inv(a).dot(scipy.linalg.expm(-kappa))])
        mf1 = scf.UHF(system)
        self.assertAlmostEqual(mf1.kernel((c0, c1)), -8.4, 9)
        self.assertTrue(len(mf1.trace) > 1)
        mf1 = scf.UHF(system)
        self.assertAlmostEqual(mf1.kernel(c0), -8.4, 9)
        # a plain 2D array serves both spins of a one-irrep system
        mf1 = scf.UHF(system)
        self.assertAlmostEqual(mf1.kernel(c0[0]), -8.4, 9)
        self.assertFalse(mf1.mo_coeff_a is mf1.mo_coeff_b)
        system.stdout.close()

    def test_closed_shell(self):
        system = model_system(4, 0, nirrep=2)[0]
        mf1 = scf.UHF(system)
        self.assertAlmostEqual(mf1.kernel(), -8.2, 9)
        self.assertEqual(mf1.nalphapi.tolist(), mf1.nbetapi.tolist())
        self.assertAlmostEqual(mf1.kernel(), scf.RHF(system).kernel(), 9)
        system.stdout.close()

    def test_irrep_occ(self):
        system = model_system(nirrep=2)[0]
        system.irrep_name = ['Ag', 'Bu']
        mf1 = scf.UHF(system)
        mf1.irrep_occ = {'Ag': (1, 1), 'Bu': (2, 1)}
        self.assertAlmostEqual(mf1.kernel(), -6.9, 9)
        self.assertEqual(mf1.nalphapi.tolist(), [1, 2])

        mf1.irrep_occ = {'Ag': (3, 0), 'Bu': (0, 2)}
        self.assertRaises(ConfigurationError, mf1.kernel)
        mf1.irrep_occ = {'Ag': (1, 1), 'Bu': (1, 1)}
        self.assertRaises(ConfigurationError, mf1.kernel)
        system.stdout.close()

    def test_analyze(self):
        mf.analyze()


if __name__ == "__main__":
    print("Full Tests for UHF")
    unittest.main()
