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

"""Tensor factories.

An assembler is handed a factory explicitly and asks it for the
destination tensor, so the choice of backend is made by the caller
rather than by process-wide state.
"""

import abc

from varform import exceptions as ex
from varform.tensor.scalar import ScalarTensor


class TensorFactory(abc.ABC):
    """Creates assembly destinations for one backend."""

    @abc.abstractmethod
    def create_tensor(self, rank, dims, group):
        """Return a zeroed :class:`~.GenericTensor`.

        :arg rank: the number of dimensions.
        :arg dims: the global size along each dimension.
        :arg group: the :class:`~.DistributedGroup` the tensor is
            distributed over.
        """


class ScalarFactory(TensorFactory):
    """Factory for functionals: only creates :class:`~.ScalarTensor`\\s."""

    def create_tensor(self, rank, dims=(), group=None):
        if rank != 0:
            raise ex.UnsupportedRankError("ScalarFactory cannot create a tensor of rank %d" % rank)
        return ScalarTensor(group=group)
