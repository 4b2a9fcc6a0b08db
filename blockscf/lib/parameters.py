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
Runtime parameters of blockscf.

Scratch directory
-----------------

Disk-backed DIIS histories are written under :data:`TMPDIR`.  It defaults
to the system temporary directory and can be changed with the environment
variable ``BLOCKSCF_TMPDIR`` or in the global configuration file.

In-core limit
-------------

:data:`DIIS_INCORE_SIZE` is the number of float64 elements of a single
DIIS vector above which the history is kept on disk rather than in memory.
'''

from blockscf import __config__

TMPDIR = getattr(__config__, 'TMPDIR', '.')
DIIS_INCORE_SIZE = getattr(__config__, 'lib_diis_incore_size', 10000000)  # 80 MB
OUTPUT_DIGITS = getattr(__config__, 'OUTPUT_DIGITS', 6)
OUTPUT_COLS   = getattr(__config__, 'OUTPUT_COLS', 4)

VERBOSE_DEBUG  = 5
VERBOSE_INFO   = 4
VERBOSE_NOTICE = 3
VERBOSE_WARN   = 2
VERBOSE_ERR    = 1
VERBOSE_QUIET  = 0
