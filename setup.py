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

import os
import sys
from setuptools import setup, find_packages

def get_version():
    topdir = os.path.abspath(os.path.join(__file__, '..'))
    with open(os.path.join(topdir, 'blockscf', '__init__.py'), 'r') as f:
        for line in f.readlines():
            if line.startswith('__version__'):
                delim = '"' if '"' in line else "'"
                return line.split(delim)[1]
    raise ValueError("Version string not found")
VERSION = get_version()

# scipy bugs
# https://github.com/scipy/scipy/issues/12533
_scipy_version = 'scipy!=1.5.0,!=1.5.1'
if sys.platform == 'darwin':
    print('scipy>1.1.0 may crash when calling scipy.linalg.eigh. '
          '(Issues https://github.com/scipy/scipy/issues/15362 '
          'https://github.com/scipy/scipy/issues/16151)')

setup(
    name='blockscf',
    version=VERSION,
    description='Symmetry-blocked RHF/ROHF/UHF self-consistent field engine',
    license='Apache-2.0',
    python_requires='>=3.7',
    packages=find_packages(exclude=['*test*', '*examples*']),
    install_requires=[
        'numpy>=1.13,!=1.16,!=1.17',
        _scipy_version,
        'h5py>=2.7',
    ],
    extras_require={
        'test': ['pytest', 'pyscf'],
    },
)
