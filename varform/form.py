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

"""Variational forms.

A note on the order of trial and test spaces: argument spaces are
numbered starting with the leading dimension of the corresponding
tensor.  In other words, the test space is numbered 0 and the trial
space is numbered 1, even though the usual notation for a bilinear form
``a(u, v)`` lists the trial function first.  A bilinear form is therefore
constructed with the spaces ``[V_test, V_trial]``.
"""

import numpy as np

from varform import exceptions as ex
from varform.coefficients import CoefficientSet
from varform.integrals import IntegralSet
from varform.kernel import (KernelDescriptor, CELL, EXTERIOR_FACET, INTERIOR_FACET,
                            VERTEX, as_integral_type)
from varform.logger import debug
from varform.markers import NO_MARKERS, as_domain_markers
from varform.utils import as_tuple, validate_type


class VariationalForm:
    """A form assembled from generated integral kernels.

    :arg descriptor: the :class:`~.KernelDescriptor` of the generated code.
    :arg function_spaces: the argument spaces, test space first.
    :arg mesh: optional mesh.  Needed for functionals (rank 0 forms)
        without argument spaces; otherwise the mesh of the first argument
        space is used.

    The form is immutable apart from its domain markers, explicit mesh,
    coefficient functions and coefficient resolver, so it may be shared
    by any number of assemblers.
    """

    @validate_type(('descriptor', KernelDescriptor, TypeError))
    def __init__(self, descriptor, function_spaces, mesh=None):
        function_spaces = as_tuple(function_spaces)
        if descriptor.rank != len(function_spaces):
            raise ex.ConfigurationError("Form rank is %d but %d argument spaces were given"
                                        % (descriptor.rank, len(function_spaces)))
        meshes = set(id(V.mesh()) for V in function_spaces)
        if len(meshes) > 1:
            raise ex.ConfigurationError("Argument spaces of a form must share a mesh")
        self.descriptor = descriptor
        self._function_spaces = function_spaces
        self._mesh = mesh
        self._coefficients = CoefficientSet(descriptor.coefficient_names,
                                            descriptor.original_coefficient_positions)
        self._integrals = IntegralSet(descriptor.integrals,
                                      tuple(int(V.max_local_dofs()) for V in function_spaces))
        self._coefficient_resolver = None
        self._domains = dict((t, NO_MARKERS) for t in (CELL, EXTERIOR_FACET, INTERIOR_FACET, VERTEX))
        debug("Created %d-form %s with %d coefficients and %d integrals",
              self.rank(), descriptor.name, len(self._coefficients), len(self._integrals))

    def rank(self):
        """Rank of the form (bilinear form = 2, linear form = 1,
        functional = 0, etc)."""
        return len(self._function_spaces)

    def function_space(self, i):
        """Return the argument space number ``i`` (0 is the test space)."""
        if not 0 <= i < self.rank():
            raise ex.IndexOutOfRangeError("Argument index %d out of range for a %d-form"
                                          % (i, self.rank()))
        return self._function_spaces[i]

    def function_spaces(self):
        return self._function_spaces

    def set_mesh(self, mesh):
        """Set the mesh, necessary for functionals without argument spaces."""
        self._mesh = mesh

    def mesh(self):
        """The explicit mesh if one was set, else the mesh of the test space.

        :raises ConfigurationError: if neither is available.
        """
        if self._mesh is not None:
            return self._mesh
        if self._function_spaces:
            return self._function_spaces[0].mesh()
        raise ex.ConfigurationError("No mesh set on %s and no argument spaces to take one from"
                                    % self.descriptor.name)

    def coefficients(self):
        return self._coefficients

    def integrals(self):
        return self._integrals

    def set_coefficient_resolver(self, resolver):
        """Install an override for coefficient name and index lookups.

        :arg resolver: an object with ``index(name)`` and ``name(i)``
            methods returning ``None`` for unmapped values, such as a
            :class:`~.CoefficientMap`.  ``None`` restores the kernel
            descriptor's map.
        """
        self._coefficient_resolver = resolver

    def _resolver(self):
        if self._coefficient_resolver is not None:
            return self._coefficient_resolver
        return self.descriptor.coefficient_map

    def coefficient_index(self, name):
        i = self._resolver().index(name)
        if i is None:
            raise ex.CoefficientNotFoundError("No coefficient named %r in %s"
                                              % (name, self.descriptor.name))
        return i

    def coefficient_name(self, i):
        name = self._resolver().name(i)
        if name is None:
            raise ex.CoefficientNotFoundError("No coefficient number %d in %s"
                                              % (i, self.descriptor.name))
        return name

    def original_coefficient_position(self, i):
        """Position of coefficient ``i`` before unused coefficients were dropped."""
        return self._coefficients.original_position(i)

    def max_element_tensor_size(self):
        """Maximum number of entries in a local element tensor.

        If the largest number of local dofs of argument space ``i`` is
        ``N_i``, this is 1 for a functional, ``N_0`` for a linear form,
        and ``N_0*N_1`` for a bilinear form.
        """
        return int(np.prod([int(V.max_local_dofs()) for V in self._function_spaces],
                           dtype=np.int64))

    def domains(self, integral_type):
        """Markers for entities of ``integral_type``, or :data:`~.NO_MARKERS`."""
        return self._domains[as_integral_type(integral_type)]

    def set_domains(self, integral_type, markers):
        """Replace the markers for ``integral_type``; ``None`` clears them."""
        integral_type = as_integral_type(integral_type)
        markers = as_domain_markers(markers, integral_type)
        if markers is not NO_MARKERS and markers.integral_type is not integral_type:
            raise ex.ConfigurationError("Cannot use %s markers as %s domains"
                                        % (markers.integral_type.value, integral_type.value))
        self._domains[integral_type] = markers

    def cell_domains(self):
        return self.domains(CELL)

    def exterior_facet_domains(self):
        return self.domains(EXTERIOR_FACET)

    def interior_facet_domains(self):
        return self.domains(INTERIOR_FACET)

    def vertex_domains(self):
        return self.domains(VERTEX)

    def set_cell_domains(self, cell_domains):
        self.set_domains(CELL, cell_domains)

    def set_exterior_facet_domains(self, exterior_facet_domains):
        self.set_domains(EXTERIOR_FACET, exterior_facet_domains)

    def set_interior_facet_domains(self, interior_facet_domains):
        self.set_domains(INTERIOR_FACET, interior_facet_domains)

    def set_vertex_domains(self, vertex_domains):
        self.set_domains(VERTEX, vertex_domains)

    def __repr__(self):
        return "VariationalForm(%r, %r)" % (self.descriptor, self._function_spaces)
