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
Helper functions and the base class of computing objects
'''

import os
import sys
import tempfile
import warnings
import weakref
import numpy
import h5py
from blockscf.lib import parameters as param


def prange(start, end, step):
    '''Split the sequence [start, end) into fragments of length step and
    yield the boundaries (p0, p1) of each fragment.

    Examples:

    >>> for p0, p1 in lib.prange(0, 8, 3):
    ...    print(p0, p1)
    0 3
    3 6
    6 8
    '''
    if start < end:
        for i in range(start, end, step):
            yield i, min(i+step, end)

def isinteger(obj):
    '''Check if an object is an integer (python int or numpy integer).'''
    return isinstance(obj, (int, numpy.integer)) and not isinstance(obj, bool)


class StreamObject:
    '''Base class of the computing objects.

    1 ``.set`` updates object attributes, e.g.
    ``mf = scf.ROHF(system).set(conv_tol=1e-8)``

    2 ``.run`` updates the attributes given as keyword arguments then calls
    ``.kernel`` with the positional arguments.  It returns the object
    itself, so that calls can be chained:
    ``mf = scf.ROHF(system).run(conv_tol=1e-8)``
    '''

    verbose = 0
    stdout = sys.stdout
    _keys = {'verbose', 'stdout'}

    def kernel(self, *args, **kwargs):
        '''
        Main driver of a method.  The return value is method dependent.
        '''
        pass

    def run(self, *args, **kwargs):
        self.set(**kwargs)
        self.kernel(*args)
        return self

    def set(self, *args, **kwargs):
        if args:
            warnings.warn('method set() only supports keyword arguments.\n'
                          'Arguments %s are ignored.' % (args,))
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    __call__ = set

    def check_sanity(self):
        '''Warn about attributes which are assigned to the object but not
        declared in the ``_keys`` of any class in the hierarchy.  Attributes
        prefixed with "_" are ignored.
        '''
        if self.verbose > 0:
            cls_keys = [cls._keys for cls in self.__class__.__mro__[:-1]
                        if hasattr(cls, '_keys')]
            keys_ref = set(self._keys).union(*cls_keys)
            unknown = [k for k in self.__dict__
                       if not k.startswith('_') and k not in keys_ref]
            if unknown:
                warnings.warn('%s does not have attributes %s'
                              % (self.__class__.__name__, ' '.join(unknown)))
        return self


class H5TmpFile(h5py.File):
    '''An HDF5 file which is deleted when it is closed or released, unless
    an explicit filename is given.

    >>> from blockscf import lib
    >>> ftmp = lib.H5TmpFile()
    '''
    def __init__(self, filename=None, mode='a', prefix='', suffix='.h5',
                 dir=None, *args, **kwargs):
        delete_on_close = filename is None
        if filename is None:
            if dir is None:
                dir = param.TMPDIR
            fd, filename = tempfile.mkstemp(prefix=prefix, suffix=suffix,
                                            dir=dir)
            os.close(fd)
            mode = 'w'

        def _delete_with_check(fname, should_delete):
            if should_delete and os.path.exists(fname):
                os.remove(fname)

        self._finalizer = weakref.finalize(self, _delete_with_check,
                                           filename, delete_on_close)
        super().__init__(filename, mode, *args, **kwargs)

    def close(self):
        if self.id.valid:
            self.flush()
        super().close()
        self._finalizer()

    def __exit__(self, type, value, traceback):
        self.close()
