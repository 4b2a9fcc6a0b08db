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

'''
Symmetry-blocked linear algebra.  The point group, its irreps and the
symmetry-adapted basis are supplied by the caller.
'''

from blockscf.symm import blocked
from blockscf.symm.blocked import (BlockedMatrix, BlockedVector,
                                   symmetrize_matrix, so2ao_mo_coeff,
                                   orthogonalizer)
