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
Symmetry-blocked matrices and vectors.

A quantity which is totally symmetric under the point group is block
diagonal in a symmetry-adapted basis.  Only the diagonal blocks are stored,
one dense array per irreducible representation.  All operations act block by
block and never couple different irreps.

The rows of a matrix block run over the symmetry-adapted basis functions of
the irrep.  The columns run over the same functions for operators (Fock,
density) or over molecular orbitals for coefficient matrices.  The two
dimensions differ when the orthogonalizer removes linear dependencies.
'''

import numpy
import scipy.linalg
from blockscf.lib.exceptions import BlockStructureError
from blockscf import __config__

LINDEP_THRESHOLD = getattr(__config__, 'symm_blocked_lindep', 1e-8)


class BlockedMatrix:
    '''Block diagonal matrix stored as a list of 2D arrays, one per irrep.

    >>> a = BlockedMatrix([numpy.eye(2), numpy.eye(1)])
    >>> a.rowdims
    array([2, 1])
    '''
    def __init__(self, blocks, name=None):
        self.blocks = [numpy.asarray(b, dtype=numpy.double) for b in blocks]
        for b in self.blocks:
            if b.ndim != 2:
                raise BlockStructureError('Matrix block must be 2D, got shape %s'
                                          % (b.shape,))
        self.name = name

    @classmethod
    def zeros(cls, rowdims, coldims=None, name=None):
        if coldims is None:
            coldims = rowdims
        return cls([numpy.zeros((m, n)) for m, n in zip(rowdims, coldims)], name)

    @classmethod
    def identity(cls, dims, name=None):
        return cls([numpy.eye(n) for n in dims], name)

    @classmethod
    def from_vector(cls, vec, template):
        '''Unpack a 1D array produced by :meth:`ravel` using the block shapes
        of template.'''
        vec = numpy.asarray(vec)
        blocks = []
        p0 = 0
        for b in template.blocks:
            p1 = p0 + b.size
            blocks.append(vec[p0:p1].reshape(b.shape))
            p0 = p1
        if p0 != vec.size:
            raise BlockStructureError('Vector of size %d does not match blocks of '
                                      'total size %d' % (vec.size, p0))
        return cls(blocks, template.name)

    @property
    def nirrep(self):
        return len(self.blocks)

    @property
    def rowdims(self):
        return numpy.array([b.shape[0] for b in self.blocks], dtype=int)

    @property
    def coldims(self):
        return numpy.array([b.shape[1] for b in self.blocks], dtype=int)

    @property
    def size(self):
        return sum(b.size for b in self.blocks)

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __getitem__(self, h):
        return self.blocks[h]

    def __setitem__(self, h, value):
        self.blocks[h][:] = value

    def __repr__(self):
        return '<%s %s shapes=%s>' % (self.__class__.__name__, self.name or '',
                                      [b.shape for b in self.blocks])

    def _check_structure(self, other):
        if (self.nirrep != other.nirrep or
            any(a.shape != b.shape for a, b in zip(self.blocks, other.blocks))):
            raise BlockStructureError('Block structures %s and %s do not match'
                                      % ([a.shape for a in self.blocks],
                                         [b.shape for b in other.blocks]))

    def copy(self, name=None):
        return BlockedMatrix([b.copy() for b in self.blocks], name or self.name)

    def copy_from(self, other):
        '''Overwrite the blocks in place with the contents of other.'''
        self._check_structure(other)
        for a, b in zip(self.blocks, other.blocks):
            numpy.copyto(a, b)
        return self

    def zero(self):
        for b in self.blocks:
            b[:] = 0
        return self

    def __add__(self, other):
        self._check_structure(other)
        return BlockedMatrix([a + b for a, b in zip(self.blocks, other.blocks)])

    def __sub__(self, other):
        self._check_structure(other)
        return BlockedMatrix([a - b for a, b in zip(self.blocks, other.blocks)])

    def __iadd__(self, other):
        self._check_structure(other)
        for a, b in zip(self.blocks, other.blocks):
            a += b
        return self

    def __isub__(self, other):
        self._check_structure(other)
        for a, b in zip(self.blocks, other.blocks):
            a -= b
        return self

    def __mul__(self, factor):
        return BlockedMatrix([a * factor for a in self.blocks])
    __rmul__ = __mul__

    def __neg__(self):
        return self * -1

    @property
    def T(self):
        return BlockedMatrix([a.T for a in self.blocks])

    def dot(self, other):
        '''Block-wise matrix product self * other'''
        if self.nirrep != other.nirrep:
            raise BlockStructureError('Number of irreps %d != %d'
                                      % (self.nirrep, other.nirrep))
        return BlockedMatrix([numpy.dot(a, b) for a, b in zip(self.blocks, other.blocks)])

    def transform(self, c):
        '''C^T A C for each block'''
        return BlockedMatrix([c_h.T.dot(a).dot(c_h)
                              for a, c_h in zip(self.blocks, c.blocks)])

    def back_transform(self, c):
        '''C A C^T for each block'''
        return BlockedMatrix([c_h.dot(a).dot(c_h.T)
                              for a, c_h in zip(self.blocks, c.blocks)])

    def vector_dot(self, other):
        '''Sum of the element-wise products over all blocks'''
        self._check_structure(other)
        return sum(numpy.einsum('ij,ij->', a, b)
                   for a, b in zip(self.blocks, other.blocks))

    def rms(self):
        '''Root-mean-square of all elements of all blocks'''
        n = self.size
        if n == 0:
            return 0.
        return numpy.sqrt(sum(numpy.einsum('ij,ij->', a, a) for a in self.blocks) / n)

    def trace(self):
        '''Trace of each block'''
        return numpy.array([numpy.trace(a) for a in self.blocks])

    def symmetrize(self):
        '''(A + A^T)/2 for each square block'''
        return BlockedMatrix([(a + a.T) * .5 for a in self.blocks])

    def diagonalize(self):
        '''Eigenvalues (ascending within each irrep) and eigenvectors of a
        symmetric blocked matrix.'''
        es = []
        cs = []
        for a in self.blocks:
            if a.size == 0:
                es.append(numpy.zeros(a.shape[0]))
                cs.append(numpy.zeros(a.shape))
            else:
                e, c = scipy.linalg.eigh(a)
                es.append(e)
                cs.append(c)
        return BlockedVector(es), BlockedMatrix(cs)

    def ravel(self):
        if not self.blocks:
            return numpy.zeros(0)
        return numpy.hstack([a.ravel() for a in self.blocks])

    def to_ao(self, symm_orb):
        '''Assemble the matrix in the AO basis, SO_h A_h SO_h^T summed over
        irreps.'''
        nao = symm_orb[0].shape[0]
        out = numpy.zeros((nao, nao))
        for so, a in zip(symm_orb, self.blocks):
            out += so.dot(a).dot(so.T)
        return out


class BlockedVector:
    '''List of 1D arrays, one per irrep.'''
    def __init__(self, blocks, name=None):
        self.blocks = [numpy.asarray(b, dtype=numpy.double).ravel() for b in blocks]
        self.name = name

    @classmethod
    def zeros(cls, dims, name=None):
        return cls([numpy.zeros(n) for n in dims], name)

    @property
    def nirrep(self):
        return len(self.blocks)

    @property
    def dims(self):
        return numpy.array([b.size for b in self.blocks], dtype=int)

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __getitem__(self, h):
        return self.blocks[h]

    def __setitem__(self, h, value):
        self.blocks[h][:] = value

    def __repr__(self):
        return '<%s %s dims=%s>' % (self.__class__.__name__, self.name or '',
                                    self.dims.tolist())

    def copy(self, name=None):
        return BlockedVector([b.copy() for b in self.blocks], name or self.name)

    def ravel(self):
        if not self.blocks:
            return numpy.zeros(0)
        return numpy.hstack(self.blocks)

    def irrep_labels(self):
        '''Irrep index of each element of :meth:`ravel`'''
        return numpy.hstack([numpy.full(b.size, h, dtype=int)
                             for h, b in enumerate(self.blocks)] or [numpy.zeros(0, dtype=int)])


def symmetrize_matrix(mat, symm_orb):
    '''Project an AO matrix onto the symmetry-adapted basis of each irrep.'''
    return BlockedMatrix([so.T.dot(mat).dot(so) for so in symm_orb])

def so2ao_mo_coeff(symm_orb, mo_coeff):
    '''Transform blocked MO coefficients to the AO representation.  The
    orbitals are grouped by irreps in the result.'''
    return numpy.hstack([numpy.dot(so, c) for so, c in zip(symm_orb, mo_coeff)])

def orthogonalizer(s, lindep=LINDEP_THRESHOLD):
    '''Orthogonalizer X with X^T S X = 1 for each irrep block.

    Symmetric (Lowdin) orthogonalization S^{-1/2} is used when the smallest
    eigenvalue of the overlap block is above lindep.  Otherwise canonical
    orthogonalization drops the eigenvectors below lindep and the block
    becomes rectangular.
    '''
    xs = []
    for s_h in s.blocks:
        if s_h.size == 0:
            xs.append(numpy.zeros(s_h.shape))
            continue
        e, v = scipy.linalg.eigh(s_h)
        if e[0] > lindep:
            xs.append((v / numpy.sqrt(e)).dot(v.T))
        else:
            idx = e > lindep
            xs.append(v[:,idx] / numpy.sqrt(e[idx]))
    return BlockedMatrix(xs, 'Orthogonalizer')
