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

"""The integrals of a form, classified by integral type."""

import numpy as np

from varform import exceptions as ex
from varform.kernel import IntegralType, INTERIOR_FACET, OTHERWISE, as_integral_type
from varform.utils import as_tuple


class IntegralSet:
    """Integral kernels of a form, grouped by :class:`~.IntegralType`.

    :arg integrals: iterable of :class:`~.IntegralKernel`.
    :arg local_dofs: the maximum number of local degrees of freedom of
        each argument space, test space first.  Used to size local blocks.
    """

    def __init__(self, integrals, local_dofs=()):
        self._local_dofs = as_tuple(local_dofs, int)
        self._integrals = dict((t, {}) for t in IntegralType)
        for kernel in integrals:
            integral_type = as_integral_type(kernel.integral_type)
            by_id = self._integrals[integral_type]
            if kernel.subdomain_id in by_id:
                raise ex.ConfigurationError("Duplicate %s integral for subdomain %r"
                                            % (integral_type.value, kernel.subdomain_id))
            by_id[kernel.subdomain_id] = kernel

    def has_integrals(self, integral_type):
        return bool(self._integrals[as_integral_type(integral_type)])

    def num_integrals(self, integral_type):
        return len(self._integrals[as_integral_type(integral_type)])

    def integral_ids(self, integral_type):
        """Sorted subdomain ids with their own integral, excluding the default."""
        return tuple(sorted(i for i in self._integrals[as_integral_type(integral_type)]
                            if i != OTHERWISE))

    def default(self, integral_type):
        """The default integral of the given type, or ``None``."""
        return self._integrals[as_integral_type(integral_type)].get(OTHERWISE)

    def get(self, integral_type, subdomain_id=OTHERWISE):
        """The integral for ``subdomain_id``, falling back to the default.

        Returns ``None`` if neither exists.
        """
        by_id = self._integrals[as_integral_type(integral_type)]
        kernel = by_id.get(subdomain_id)
        if kernel is None:
            kernel = by_id.get(OTHERWISE)
        return kernel

    def max_local_size(self, integral_type):
        """Number of entries of a local block for this integral type alone.

        Interior facet blocks couple the degrees of freedom of both cells
        sharing the facet.
        """
        integral_type = as_integral_type(integral_type)
        if not self.has_integrals(integral_type):
            return 0
        factor = 2 if integral_type is INTERIOR_FACET else 1
        return int(np.prod([factor * n for n in self._local_dofs], dtype=np.int64))

    def __iter__(self):
        for integral_type in IntegralType:
            yield from self._integrals[integral_type].values()

    def __len__(self):
        return sum(len(by_id) for by_id in self._integrals.values())

    def __repr__(self):
        return "IntegralSet(%r, %r)" % (list(self), self._local_dofs)
