# Copyright 2014-2022 The PySCF Developers. All Rights Reserved.
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

'''
*************************************************
blockscf: symmetry-blocked Hartree-Fock SCF engine
*************************************************

The one- and two-electron integrals are supplied by the caller through a
:class:`System` object::

    >>> from blockscf import System, scf
    >>> system = System(hcore, ovlp=ovlp, jk=scf.jk.DenseJK(eri),
    ...                 nelectron=5, spin=1, energy_nuc=enuc)
    >>> mf = scf.ROHF(system).run()
    >>> mf.e_tot, mf.docc, mf.socc
'''

__version__ = '0.1.0'

from blockscf import __config__
from blockscf import lib
from blockscf import symm
from blockscf import scf
from blockscf.system import System

DEBUG = __config__.DEBUG
