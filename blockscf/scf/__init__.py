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
Hartree-Fock
============

Simple usage::

    >>> from blockscf import System, scf
    >>> system = System(hcore, ovlp=s, jk=scf.jk.DenseJK(eri), nelectron=5, spin=1)
    >>> mf = scf.ROHF(system).run()

:func:`scf.RHF` returns an ROHF object for open-shell systems.
'''

from blockscf.scf import hf
from blockscf.scf import hf as rhf
from blockscf.scf import rohf
from blockscf.scf import uhf
from blockscf.scf import diis
from blockscf.scf import jk
from blockscf.scf.hf import SCFState, ConvergenceMonitor, select_occupation


def RHF(system, *args):
    __doc__ = rhf.RHF.__doc__
    if system.spin == 0:
        return rhf.RHF(system, *args)
    else:
        return rohf.ROHF(system, *args)

def ROHF(system, *args):
    __doc__ = rohf.ROHF.__doc__
    return rohf.ROHF(system, *args)

def UHF(system, *args):
    __doc__ = uhf.UHF.__doc__
    return uhf.UHF(system, *args)

def HF(system, *args):
    if system.spin == 0:
        return RHF(system, *args)
    else:
        return UHF(system, *args)
