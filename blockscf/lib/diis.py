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

"""
DIIS
"""

import re
import numpy
import scipy.linalg
from blockscf.lib import logger
from blockscf.lib import misc
from blockscf.lib import parameters as param
from blockscf.lib.exceptions import ConfigurationError
from blockscf.symm.blocked import BlockedMatrix
from blockscf import __config__

INCORE_SIZE = param.DIIS_INCORE_SIZE
BLOCK_SIZE  = getattr(__config__, 'lib_diis_block_size', 20000000)  # ~ 160 MB
LINDEP = getattr(__config__, 'lib_diis_lindep', 1e-14)

# Chem. Phys. Lett. 73, 393 (1980); DOI:10.1016/0009-2614(80)80396-4
# J. Comput. Chem. 3, 556 (1982); DOI:10.1002/jcc.540030413


class InCoreStorage:
    '''DIIS vectors kept in memory'''
    def __init__(self):
        self._data = {}

    def store(self, key, value):
        self._data[key] = numpy.array(value, copy=True)

    def load(self, key):
        return self._data[key]

    def delete(self, key):
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())

    def __contains__(self, key):
        return key in self._data

    def close(self):
        self._data.clear()


class H5Storage:
    '''DIIS vectors kept in an HDF5 file.  The file is flushed after every
    write so that the history can be read back by :meth:`DIIS.restore`.
    Only one writer may hold the file.

    If filename is None, a temporary file is created under
    :data:`blockscf.lib.parameters.TMPDIR` and removed when the storage is
    closed.
    A new DIIS history opens its file with mode='w', which discards the
    vectors of earlier runs.
    '''
    def __init__(self, filename=None, mode='a'):
        self.filename = filename
        self._file = misc.H5TmpFile(filename, mode)

    def store(self, key, value):
        if key in self._file:
            dset = self._file[key]
            if dset.shape == value.shape:
                dset[:] = value
            else:
                del self._file[key]
                self._file[key] = value
        else:
            self._file[key] = value
        self._file.flush()

    def load(self, key):
        return numpy.asarray(self._file[key])

    def delete(self, key):
        if key in self._file:
            del self._file[key]
            self._file.flush()

    def keys(self):
        return list(self._file.keys())

    def __contains__(self, key):
        return key in self._file

    def close(self):
        self._file.close()


def _as_vector(x):
    return numpy.asarray(x.ravel(), dtype=numpy.double)

def _blocked_dot(a, b):
    tmp = 0
    for p0, p1 in misc.prange(0, a.size, BLOCK_SIZE):
        tmp += numpy.dot(a[p0:p1], b[p0:p1])
    return tmp


class DIIS:
    '''Direct inversion in the iterative subspace method.

    Attributes:
        space : int
            Maximum number of (trial, error) pairs kept in the history.
        min_space : int
            Minimal number of pairs before extrapolation is attempted.
        eviction : str
            Which pair is dropped when the history is full.  'oldest' (FIFO,
            default) or 'largest_error' (the pair with the largest error
            norm).
        lindep : float
            Eigenvalues of the (scaled) DIIS matrix below this value mark
            the linear system as singular.

    Functions:
        record(x, xerr) :
            Push a trial vector and its error vector into the history.
        extrapolate(target) :
            Overwrite target with the linear combination of the recorded
            trial vectors which minimizes the norm of the combined error
            vector under the constraint that the coefficients sum to one.
            Returns False, leaving target untouched, if the history is empty
            or the linear system is singular.
        update(x, xerr) :
            record followed by extrapolation.  Returns the extrapolated
            vector, or x itself if the extrapolation was not possible.

    Examples:

    >>> adiis = lib.diis.DIIS()
    >>> adiis.record(f1, e1)
    >>> adiis.record(f2, e2)
    >>> adiis.extrapolate(f2)
    True
    '''
    def __init__(self, dev=None, filename=None, storage=None,
                 incore=getattr(__config__, 'lib_diis_DIIS_incore', False)):
        if dev is not None:
            self.verbose = dev.verbose
            self.stdout = dev.stdout
        else:
            self.verbose = logger.INFO
            self.stdout = misc.StreamObject.stdout
        self.space = 6
        self.min_space = 1
        self.eviction = 'oldest'
        self.lindep = LINDEP
        self.incore = incore
        self.filename = filename

##################################################
# don't modify the following private variables, they are not input options
        self._storage = storage
        self._bookkeep = []  # keys of the stored pairs, oldest first
        self._counter = 0
        self._ovlp = {}      # (key_i, key_j) -> <e_i|e_j>

    def _get_storage(self, size):
        if self._storage is None:
            if self.filename is not None or (size >= INCORE_SIZE and not self.incore):
                self._storage = H5Storage(self.filename, 'w')
            else:
                self._storage = InCoreStorage()
        return self._storage

    def get_num_vec(self):
        return len(self._bookkeep)

    def get_vec(self, key):
        return self._storage.load('x%d' % key)

    def get_err_vec(self, key):
        return self._storage.load('e%d' % key)

    def _evict(self):
        if self.eviction == 'oldest':
            key = self._bookkeep[0]
        elif self.eviction == 'largest_error':
            key = max(self._bookkeep, key=lambda k: self._ovlp[(k, k)])
        else:
            raise ConfigurationError('Unknown DIIS eviction policy %s' % self.eviction)
        logger.debug1(self, 'DIIS evicts vector %d', key)
        self._bookkeep.remove(key)
        self._storage.delete('x%d' % key)
        self._storage.delete('e%d' % key)
        for pair in [p for p in self._ovlp if key in p]:
            del self._ovlp[pair]

    def record(self, x, xerr):
        '''Push the trial vector x and its error vector xerr into the
        history.  x and xerr can be numpy arrays or BlockedMatrix objects.'''
        if self.space < 1:
            raise ConfigurationError('DIIS space must be at least 1')
        x = _as_vector(x)
        xerr = _as_vector(xerr)
        storage = self._get_storage(x.size)
        while len(self._bookkeep) >= self.space:
            self._evict()

        key = self._counter
        self._counter += 1
        storage.store('x%d' % key, x)
        storage.store('e%d' % key, xerr)
        self._bookkeep.append(key)
        for k in self._bookkeep:
            if k == key:
                dti = xerr
            else:
                dti = self.get_err_vec(k)
            self._ovlp[(key, k)] = self._ovlp[(k, key)] = _blocked_dot(xerr, dti)
        return self

    def _solve(self):
        '''DIIS coefficients of the stored vectors, or None if the linear
        system cannot be solved.'''
        nd = self.get_num_vec()
        if nd == 0:
            logger.debug(self, 'No vector found in DIIS object.')
            return None
        if nd < self.min_space:
            return None

        h = numpy.zeros((nd+1, nd+1))
        h[0,1:] = h[1:,0] = 1
        for i, ki in enumerate(self._bookkeep):
            for j, kj in enumerate(self._bookkeep):
                h[i+1,j+1] = self._ovlp[(ki, kj)]
        scale = h[1:,1:].diagonal().max()
        if scale > 0:
            h[1:,1:] /= scale
        g = numpy.zeros(nd+1)
        g[0] = 1

        w = scipy.linalg.eigh(h, eigvals_only=True)
        if numpy.any(abs(w) < self.lindep):
            logger.debug(self, 'Linear dependence found in DIIS error vectors. '
                         'eigh(h) = %s', w)
            return None
        try:
            c = numpy.linalg.solve(h, g)
        except numpy.linalg.LinAlgError:
            logger.warn(self, 'diis singular, eigh(h) %s', w)
            return None
        logger.debug1(self, 'diis-c %s', c)
        return c[1:]

    def get_extrapolated(self):
        '''The extrapolated trial vector as a flat array, or None.'''
        c = self._solve()
        if c is None:
            return None
        xnew = None
        for ci, key in zip(c, self._bookkeep):
            xi = self.get_vec(key)
            if xnew is None:
                xnew = numpy.zeros(xi.size)
            for p0, p1 in misc.prange(0, xi.size, BLOCK_SIZE):
                xnew[p0:p1] += xi[p0:p1] * ci
        return xnew

    def extrapolate(self, target):
        '''Overwrite target with the extrapolated vector.  Returns True if
        the extrapolation was performed.'''
        xnew = self.get_extrapolated()
        if xnew is None:
            return False
        if isinstance(target, BlockedMatrix):
            target.copy_from(BlockedMatrix.from_vector(xnew, target))
        else:
            target[...] = xnew.reshape(target.shape)
        return True

    def update(self, x, xerr):
        '''Record (x, xerr) and return the extrapolated vector in the shape
        of x.  x is returned unchanged if extrapolation is not possible.'''
        self.record(x, xerr)
        xnew = self.get_extrapolated()
        if xnew is None:
            return x
        if isinstance(x, BlockedMatrix):
            return BlockedMatrix.from_vector(xnew, x)
        return xnew.reshape(numpy.shape(x))

    def restore(self, filename):
        '''Rebuild the history from a DIIS file written by :class:`H5Storage`.
        Incomplete pairs (a trial vector without error vector or vice versa)
        are ignored.'''
        storage = H5Storage(filename, 'a')
        keys = storage.keys()
        xkeys = set(int(k[1:]) for k in keys if re.match(r'x\d+$', k))
        ekeys = set(int(k[1:]) for k in keys if re.match(r'e\d+$', k))
        self._storage = storage
        self.filename = filename
        self._bookkeep = sorted(xkeys & ekeys)[-self.space:]
        self._counter = max(xkeys | ekeys, default=-1) + 1
        self._ovlp = {}
        for i, ki in enumerate(self._bookkeep):
            ei = self.get_err_vec(ki)
            for kj in self._bookkeep[:i+1]:
                self._ovlp[(ki, kj)] = self._ovlp[(kj, ki)] = \
                        _blocked_dot(ei, self.get_err_vec(kj))
        return self

    def reset(self):
        '''Drop the whole history'''
        if self._storage is not None:
            for key in self._bookkeep:
                self._storage.delete('x%d' % key)
                self._storage.delete('e%d' % key)
        self._bookkeep = []
        self._ovlp = {}
        return self

    def close(self):
        if self._storage is not None:
            self._storage.close()
            self._storage = None


def restore(filename):
    '''Restore/construct diis object based on a diis file'''
    return DIIS().restore(filename)
