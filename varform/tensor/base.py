# This file is part of varform
#
# varform is Copyright (c) 2026, the varform developers.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#     * Redistributions of source code must retain the above copyright
#       notice, this list of conditions and the following disclaimer.
#     * Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#     * The names of the varform developers or of other
#       contributors may not be used to endorse or promote products
#       derived from this software without specific prior written
#       permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTERS
# ''AS IS'' AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT HOLDERS OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
# INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION)
# HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT,
# STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED
# OF THE POSSIBILITY OF SUCH DAMAGE.

"""The contract every assembly destination implements.

Assemblers only ever talk to a destination through :class:`GenericTensor`:
they add dense local blocks at global indices, and finalise the result
with a single collective :meth:`~GenericTensor.apply` per assembly pass.
Concrete backends implement the whole interface independently; the base
class carries no state.
"""

import abc

import numpy as np

from varform import exceptions as ex
from varform.utils import as_tuple


ScalarType = np.dtype(np.float64)
IntType = np.dtype(np.int64)

ADD = "add"
"""Values contributed to the same index by different processes are summed."""

APPLY_MODES = (ADD, )


def as_index_arrays(rows, num_rows=None):
    """Normalise block indices to one index array per dimension.

    :arg rows: a sequence with one sequence of global indices per
        dimension (lists, arrays, or the rows of a 2D array).
    :arg num_rows: optional number of leading entries of each index
        sequence to use, for callers holding oversized index buffers.
    """
    rows = tuple(np.asarray(r, dtype=IntType).reshape(-1) for r in as_tuple(rows))
    if num_rows is not None:
        num_rows = as_tuple(num_rows, length=len(rows))
        for n, r in zip(num_rows, rows):
            if n > len(r):
                raise ex.DataValueError("Asked for %d indices from %d" % (n, len(r)))
        rows = tuple(r[:n] for n, r in zip(num_rows, rows))
    return rows


class GenericTensor(abc.ABC):
    """Capability set of an algebraic assembly destination.

    Local :meth:`add` and :meth:`set` calls are not synchronised: callers
    assembling from several threads must serialise them.
    """

    @abc.abstractmethod
    def rank(self):
        """Number of dimensions, fixed for the lifetime of the tensor."""

    @abc.abstractmethod
    def resize(self, rank, dims):
        """Reinitialise the tensor with the given global dimensions.

        :raises UnsupportedRankError: if the realisation only supports a
            fixed rank and ``rank`` differs from it.
        """

    @abc.abstractmethod
    def size(self, dim):
        """Global size along dimension ``dim``."""

    @abc.abstractmethod
    def local_range(self, dim):
        """Half open range ``(start, end)`` of indices along ``dim``
        owned by the calling process."""

    @abc.abstractmethod
    def get(self, block, rows):
        """Read the dense block at the cross product of ``rows`` into ``block``."""

    @abc.abstractmethod
    def set(self, block, rows):
        """Overwrite the entries at the cross product of ``rows`` with ``block``."""

    @abc.abstractmethod
    def add(self, block, rows):
        """Accumulate ``block`` into the entries at the cross product of ``rows``.

        Repeated additions to the same indices commute.
        """

    @abc.abstractmethod
    def zero(self):
        """Set all entries to zero, keeping any structure."""

    @abc.abstractmethod
    def apply(self, mode):
        """Finalise assembly.

        Collective: every process of the group must call this exactly
        once per assembly pass, before the values are read.

        :arg mode: how values contributed to the same index by different
            processes are combined.  See :data:`APPLY_MODES`.
        """

    @abc.abstractmethod
    def copy(self):
        """Return an independent copy of the tensor."""
