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

'''
Helper functions: logger, DIIS, exceptions, the StreamObject base class
'''

from blockscf.lib import parameters
param = parameters
from blockscf.lib import logger
from blockscf.lib import exceptions
from blockscf.lib import misc
from blockscf.lib.misc import *
from blockscf.lib import diis
