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

import io
import unittest
import numpy
import blockscf
from blockscf import System, lib
from blockscf.lib import logger
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix
from blockscf.scf import jk


def random_eri(n, seed):
    '''Random two-electron integrals with the 8-fold permutation symmetry'''
    numpy.random.seed(seed)
    eri = numpy.random.random((n,n,n,n))
    eri = eri + eri.transpose(1,0,2,3)
    eri = eri + eri.transpose(0,1,3,2)
    eri = eri + eri.transpose(2,3,0,1)
    return eri


class KnownValues(unittest.TestCase):
    def test_defaults(self):
        system = System(numpy.eye(3), jk=lambda *args: None, nelectron=3, spin=1)
        self.assertEqual(system.irrep_name, ['A'])
        self.assertEqual(system.nelec, (2, 1))
        self.assertEqual(system.nsopi.tolist(), [3])
        self.assertEqual(system.energy_nuc(), 0)
        s = system.get_ovlp()
        self.assertAlmostEqual(abs(s[0] - numpy.eye(3)).max(), 0, 14)
        system.check()

        system = System([numpy.eye(2), numpy.eye(1)], nelectron=2)
        self.assertEqual(system.irrep_name, ['irrep0', 'irrep1'])
        self.assertEqual(system.nirrep, 2)
        self.assertEqual(system.nelec, (1, 1))

    def test_negative_spin(self):
        system = System(numpy.eye(3), nelectron=3, spin=-1)
        self.assertEqual(system.nelec, (1, 2))

    def test_orthogonalizer_cached(self):
        s = numpy.array([[1., .2], [.2, 1.]])
        system = System(numpy.eye(2), ovlp=s)
        x = system.get_orth()
        self.assertTrue(system.get_orth() is x)
        self.assertAlmostEqual(abs(x[0].T.dot(s).dot(x[0]) - numpy.eye(2)).max(), 0, 12)

    def test_linear_dependency(self):
        s = numpy.ones((2,2))
        out = io.StringIO()
        system = System(numpy.eye(2), ovlp=s, verbose=logger.INFO, stdout=out)
        x = system.get_orth()
        self.assertEqual(x.coldims.tolist(), [1])
        self.assertTrue('Linear dependency' in out.getvalue())

    def test_check(self):
        jk = lambda *args: None
        self.assertRaises(ConfigurationError, System(numpy.eye(2), nelectron=2).check)
        self.assertRaises(ConfigurationError,
                          System(numpy.eye(2), jk=jk).check)
        self.assertRaises(ConfigurationError,
                          System(numpy.eye(2), jk=jk, nelectron=2,
                                 irrep_name=['A1', 'B1']).check)
        self.assertRaises(ConfigurationError,
                          System(numpy.ones((2,3)), jk=jk, nelectron=2).check)
        self.assertRaises(ConfigurationError,
                          System(numpy.eye(2), ovlp=numpy.eye(3), jk=jk,
                                 nelectron=2).check)
        self.assertRaises(ConfigurationError,
                          System(numpy.eye(2), jk=jk, nelectron=5, spin=1).check)

    def test_set_run(self):
        system = System(numpy.eye(2))
        self.assertTrue(system.set(nelectron=2) is system)
        self.assertEqual(system.nelectron, 2)

    def test_dump_input(self):
        out = io.StringIO()
        system = System([numpy.eye(2), numpy.eye(1)], jk=None, nelectron=4,
                        energy_nuc=1.5, irrep_name=['Ag', 'Bu'],
                        verbose=logger.INFO, stdout=out)
        system.dump_input()
        self.assertTrue('Ag Bu' in out.getvalue())
        self.assertTrue('nuclear repulsion = 1.5' in out.getvalue())

    def test_version(self):
        self.assertTrue(isinstance(blockscf.__version__, str))


class DenseJKTest(unittest.TestCase):
    def test_dot_eri_dm(self):
        eri = random_eri(3, 1)
        numpy.random.seed(2)
        dm = numpy.random.random((3,3))
        dm = dm + dm.T
        vj, vk = jk.dot_eri_dm(eri, dm)
        ref_j = numpy.zeros((3,3))
        ref_k = numpy.zeros((3,3))
        for i in range(3):
            for j in range(3):
                for k in range(3):
                    for l in range(3):
                        ref_j[i,j] += eri[i,j,k,l] * dm[k,l]
                        ref_k[i,l] += eri[i,j,k,l] * dm[j,k]
        self.assertAlmostEqual(abs(vj - ref_j).max(), 0, 12)
        self.assertAlmostEqual(abs(vk - ref_k).max(), 0, 12)

    def test_blocked(self):
        eri = numpy.zeros((4,4,4,4))
        # (ij|kl) is totally symmetric only if i,j and k,l share an irrep
        big = random_eri(4, 3)
        irrep = numpy.array([0, 1, 0, 1])
        mask = ((irrep[:,None,None,None] == irrep[None,:,None,None]) &
                (irrep[None,None,:,None] == irrep[None,None,None,:]))
        eri[mask] = big[mask]
        symm_orb = [numpy.eye(4)[:,[0,2]], numpy.eye(4)[:,[1,3]]]
        dma = BlockedMatrix([numpy.array([[1., .1], [.1, .5]]), numpy.eye(2) * .3])
        dmb = BlockedMatrix([numpy.array([[.4, 0], [0, .2]]), numpy.eye(2) * .1])
        vj, vka, vkb = jk.DenseJK(eri, symm_orb)(dma, dmb)
        ref_j, ref_ka = jk.dot_eri_dm(eri, dma.to_ao(symm_orb))
        ref_j = ref_j + jk.dot_eri_dm(eri, dmb.to_ao(symm_orb))[0]
        self.assertAlmostEqual(abs(vj.to_ao(symm_orb) - ref_j).max(), 0, 12)
        self.assertAlmostEqual(abs(vka.to_ao(symm_orb) - ref_ka).max(), 0, 12)
        self.assertEqual(vkb.rowdims.tolist(), [2, 2])

    def test_single_irrep(self):
        eri = random_eri(2, 4)
        dm = BlockedMatrix([numpy.eye(2) * .5])
        vj, vka, vkb = jk.DenseJK(eri)(dm, dm)
        self.assertTrue(vka is vkb)
        self.assertAlmostEqual(abs(vj[0] - jk.dot_eri_dm(eri, numpy.eye(2))[0]).max(), 0, 12)
        dm2 = BlockedMatrix([numpy.eye(1), numpy.eye(1)])
        self.assertRaises(ConfigurationError, jk.DenseJK(eri).get_jk, dm2)


class StreamObjectTest(unittest.TestCase):
    def test_check_sanity(self):
        obj = lib.StreamObject()
        obj.verbose = 1
        obj.unknown_attribute = 1
        with self.assertWarns(UserWarning):
            obj.check_sanity()

    def test_prange(self):
        self.assertEqual(list(lib.prange(0, 5, 2)), [(0, 2), (2, 4), (4, 5)])


if __name__ == "__main__":
    print("Full Tests for System")
    unittest.main()
