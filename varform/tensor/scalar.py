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

from varform import exceptions as ex, mpi
from varform.tensor.base import GenericTensor, APPLY_MODES, ScalarType
from varform.utils import verify_reshape


def _first(block):
    block = verify_reshape(block, ScalarType, (-1, ))
    if block.size == 0:
        raise ex.DataValueError("Empty block passed to a ScalarTensor")
    return block[0]


class ScalarTensor(GenericTensor):
    """A real valued scalar implementing the :class:`~.GenericTensor`
    interface, used as the destination of functional assembly.

    :arg value: the initial value.
    :arg group: the :class:`~.DistributedGroup` (or communicator) the
        value is reduced over in :meth:`apply`.  Defaults to
        ``COMM_WORLD``.

    Outside of :meth:`add` and :meth:`apply` the tensor behaves like a
    plain number: it can be converted with ``float()`` and assigned with
    :meth:`assign`.
    """

    ASSEMBLED = "ASSEMBLED"
    INSERT_VALUES = "INSERT_VALUES"
    ADD_VALUES = "ADD_VALUES"

    def __init__(self, value=0.0, group=None):
        self._value = ScalarType.type(value)
        self.group = mpi.as_group(group)
        self.assembly_state = ScalarTensor.ASSEMBLED

    def rank(self):
        return 0

    def resize(self, rank, dims=()):
        if rank != 0:
            raise ex.UnsupportedRankError("Cannot resize a ScalarTensor to rank %d" % rank)
        self.zero()

    def size(self, dim):
        raise ex.UnsupportedOperationError("The size() function is not available for scalars.")

    def local_range(self, dim):
        raise ex.UnsupportedOperationError("The local_range() function is not available for scalars.")

    def get(self, block, rows=()):
        block[0] = self._value
        return block

    def set(self, block, rows=()):
        self._value = _first(block)
        self.assembly_state = ScalarTensor.INSERT_VALUES

    def add(self, block, rows=()):
        self._value += _first(block)
        self.assembly_state = ScalarTensor.ADD_VALUES

    def zero(self):
        self._value = ScalarType.type(0)
        self.assembly_state = ScalarTensor.ASSEMBLED

    @mpi.collective
    def apply(self, mode):
        """Sum the partial values of every process of the group.

        The values are gathered and summed in rank order, so every
        process ends up with the same global value.  With a single
        process no communication takes place.
        """
        if mode not in APPLY_MODES:
            raise ex.ModeValueError("Unknown apply mode %r, expected one of %s" % (mode, APPLY_MODES))
        if self.group.process_count() > 1:
            values = self.group.all_gather(self._value)
            self._value = sum(values, ScalarType.type(0))
        self.assembly_state = ScalarTensor.ASSEMBLED

    @property
    def is_assembled(self):
        return self.assembly_state == ScalarTensor.ASSEMBLED

    def copy(self):
        """Return a deep copy of self."""
        other = type(self)(self._value, group=self.group)
        other.assembly_state = self.assembly_state
        return other

    @property
    def value(self):
        return float(self._value)

    @value.setter
    def value(self, value):
        self.assign(value)

    def assign(self, value):
        """Assign a number (or the value of another scalar) to this one."""
        self._value = ScalarType.type(float(value))
        self.assembly_state = ScalarTensor.ASSEMBLED
        return self

    def __float__(self):
        return float(self._value)

    def __str__(self):
        return "<Scalar value %g>" % self._value

    def __repr__(self):
        return "ScalarTensor(%r, group=%r)" % (float(self._value), self.group)
