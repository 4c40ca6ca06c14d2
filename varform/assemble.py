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

"""Assembly of variational forms into distributed tensors."""

import numpy as np

from varform import exceptions as ex, mpi
from varform.form import VariationalForm
from varform.kernel import IntegralType
from varform.logger import progress, debug, error, INFO
from varform.markers import NO_MARKERS
from varform.tensor import ADD, ScalarFactory, ScalarType
from varform.utils import validate_type


__all__ = ("assemble", "FormAssembler")


def assemble(form, factory=None, tensor=None):
    """Assemble a form.

    :arg form: the :class:`~.VariationalForm` to assemble.
    :arg factory: the :class:`~.TensorFactory` creating the destination.
        Defaults to a :class:`~.ScalarFactory`, which only supports
        functionals.
    :arg tensor: optional existing destination; it is zeroed first.

    :returns: a ``float`` for functionals, otherwise the assembled tensor.
    """
    assembler = FormAssembler(form, factory or ScalarFactory())
    result = assembler.assemble(tensor=tensor)
    if form.rank() == 0:
        return float(result)
    return result


class FormAssembler:
    """Assembles a :class:`~.VariationalForm` one integral type at a time.

    :arg form: the form to assemble.
    :arg factory: the :class:`~.TensorFactory` used by :meth:`allocate`.

    The argument spaces, mesh and coefficients of the form are expected
    to provide:

    - argument space: ``max_local_dofs()``, ``mesh()``, ``dim()`` and
      ``entity_dofs(integral_type, entity)``, the global indices of the
      local block's degrees of freedom;
    - mesh: a ``group`` attribute, ``entities(integral_type)`` yielding
      the entities owned by this process, and
      ``geometry(integral_type, entity)``;
    - coefficient function: ``entity_values(integral_type, entity)``.
    """

    @validate_type(('form', VariationalForm, TypeError))
    def __init__(self, form, factory):
        self._form = form
        self._factory = factory

    @property
    def form(self):
        return self._form

    def allocate(self):
        """Create a zeroed destination tensor for the form."""
        dims = tuple(V.dim() for V in self._form.function_spaces())
        group = mpi.as_group(self._form.mesh().group)
        return self._factory.create_tensor(self._form.rank(), dims, group)

    def _check_tensor(self, tensor):
        if tensor.rank() != self._form.rank():
            raise ex.ConfigurationError("Cannot assemble a %d-form into a tensor of rank %d"
                                        % (self._form.rank(), tensor.rank()))

    def _check_coefficients(self):
        missing = self._form.coefficients().missing()
        if missing:
            raise ex.ConfigurationError("No function attached to coefficient(s) %s of %s"
                                        % (", ".join(missing), self._form.descriptor.name))

    @mpi.collective
    def assemble(self, tensor=None):
        """Assemble the form.

        :arg tensor: optional destination; it is zeroed before assembly.
            If ``None``, a new one is created with :meth:`allocate`.
        :returns: the finalised destination tensor.

        If anything fails, the destination is zeroed and the error is
        raised: a partially assembled tensor is never returned.
        """
        if tensor is None:
            tensor = self.allocate()
        else:
            self._check_tensor(tensor)
            tensor.zero()
        try:
            with progress(INFO, "Assembling %d-form %s", self._form.rank(), self._form.descriptor.name):
                self._check_coefficients()
                for integral_type in IntegralType:
                    if self._form.integrals().has_integrals(integral_type):
                        self._assemble_integral_type(integral_type, tensor)
                tensor.apply(ADD)
        except Exception as e:
            error("Assembly of %s failed: %s", self._form.descriptor.name, e)
            tensor.zero()
            raise
        return tensor

    def _assemble_integral_type(self, integral_type, tensor):
        form = self._form
        mesh = form.mesh()
        integrals = form.integrals()
        spaces = form.function_spaces()
        functions = [f for _, f in form.coefficients()]
        markers = form.domains(integral_type)
        scratch = np.zeros(integrals.max_local_size(integral_type), dtype=ScalarType)
        count = 0
        for entity in mesh.entities(integral_type):
            marker = None if markers is NO_MARKERS else markers.get(entity)
            if marker is None:
                kernel = integrals.default(integral_type)
            else:
                kernel = integrals.get(integral_type, marker)
            if kernel is None:
                continue
            rows = [V.entity_dofs(integral_type, entity) for V in spaces]
            shape = tuple(len(r) for r in rows) or (1, )
            n = int(np.prod(shape))
            if n > scratch.size:
                raise ex.ConfigurationError("Local %s block of %d entries exceeds the %d allocated"
                                            % (integral_type.value, n, scratch.size))
            A = scratch[:n].reshape(shape)
            A[...] = 0
            w = [f.entity_values(integral_type, entity) for f in functions]
            kernel.tabulate_tensor(A, w, mesh.geometry(integral_type, entity), marker)
            tensor.add(A, rows)
            count += 1
        debug("Added %d %s blocks", count, integral_type.value)
