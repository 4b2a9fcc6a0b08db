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
Exceptions raised by blockscf
'''

class BlockSCFError(Exception):
    pass

class ConfigurationError(BlockSCFError, ValueError):
    '''Input that can never lead to a valid calculation: occupations which do
    not fit in the basis, non-positive thresholds, an empty iteration budget.
    '''
    pass

class BlockStructureError(BlockSCFError, ValueError):
    '''Symmetry-blocked operands whose irrep structure does not match.'''
    pass
