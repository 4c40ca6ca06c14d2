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

"""Descriptions of generated integral kernels.

A :class:`KernelDescriptor` plays the part of the code generated by a
form compiler: it declares the rank of the form, its coefficients, and
one :class:`IntegralKernel` per (integral type, subdomain) pair.  The
kernels themselves are opaque callables::

    tabulate_tensor(A, w, geometry, marker)

which write the local block of one mesh entity into the array ``A``.
"""

import collections
import enum

from varform import exceptions as ex
from varform.coefficients import CoefficientMap


class IntegralType(enum.Enum):
    CELL = "cell"
    EXTERIOR_FACET = "exterior_facet"
    INTERIOR_FACET = "interior_facet"
    VERTEX = "vertex"


CELL = IntegralType.CELL
EXTERIOR_FACET = IntegralType.EXTERIOR_FACET
INTERIOR_FACET = IntegralType.INTERIOR_FACET
VERTEX = IntegralType.VERTEX

OTHERWISE = "otherwise"
"""Subdomain id of the default integral, used on entities whose marker
has no integral of its own."""


IntegralKernel = collections.namedtuple("IntegralKernel",
                                        ["integral_type",
                                         "subdomain_id",
                                         "tabulate_tensor"])


def as_integral_type(integral_type):
    try:
        return IntegralType(integral_type)
    except ValueError:
        raise ex.ConfigurationError("Unknown integral type %r" % (integral_type, ))


class KernelDescriptor:
    """Metadata and entry points of the generated code for one form.

    :arg rank: number of arguments of the form.
    :arg coefficient_names: names of the coefficients, in kernel order.
    :arg original_coefficient_positions: position of each coefficient in
        the form before unused coefficients were dropped.
    :arg integrals: iterable of :class:`IntegralKernel`.
    :arg name: optional name, used in log messages.
    """

    def __init__(self, rank, coefficient_names=(), original_coefficient_positions=None,
                 integrals=(), name=None):
        if rank < 0:
            raise ex.ConfigurationError("Form rank must be non-negative, not %d" % rank)
        self.rank = rank
        self.coefficient_map = CoefficientMap(coefficient_names)
        if original_coefficient_positions is None:
            original_coefficient_positions = range(len(self.coefficient_map))
        self._original_positions = tuple(original_coefficient_positions)
        if len(self._original_positions) != len(self.coefficient_map):
            raise ex.ConfigurationError("Expected %d original coefficient positions, got %d"
                                        % (len(self.coefficient_map), len(self._original_positions)))
        self.integrals = tuple(IntegralKernel(as_integral_type(k.integral_type),
                                              k.subdomain_id, k.tabulate_tensor)
                               for k in integrals)
        self.name = name or "form_#x%x" % id(self)

    @property
    def num_coefficients(self):
        return len(self.coefficient_map)

    @property
    def coefficient_names(self):
        return self.coefficient_map.names

    @property
    def original_coefficient_positions(self):
        return self._original_positions

    def original_coefficient_position(self, i):
        if not 0 <= i < self.num_coefficients:
            raise ex.IndexOutOfRangeError("Coefficient index %d out of range [0, %d)"
                                          % (i, self.num_coefficients))
        return self._original_positions[i]

    def has_integrals(self, integral_type):
        integral_type = as_integral_type(integral_type)
        return any(k.integral_type is integral_type for k in self.integrals)

    def __repr__(self):
        return "KernelDescriptor(%r, %r, %r)" % (self.rank, self.coefficient_names, self.name)
