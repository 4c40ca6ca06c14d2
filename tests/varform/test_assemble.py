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

import numpy as np
import pytest

from varform import exceptions as ex
from varform.assemble import assemble, FormAssembler
from varform.form import VariationalForm
from varform.kernel import (KernelDescriptor, IntegralKernel, CELL, EXTERIOR_FACET,
                            INTERIOR_FACET, VERTEX, OTHERWISE)
from varform.mpi import SerialGroup
from varform.tensor import ScalarTensor

from collaborators import (IntervalMesh, P1Space, P0Space, ConstantFunction, DenseFactory,
                           DenseTensor, ThreadGroup, run_on_group)


def integrate_f(A, w, x, marker):
    A[0] += w[0][0] * (x[1] - x[0])


def integrate_v(A, w, x, marker):
    A += 0.5 * (x[1] - x[0])


def mass(A, w, x, marker):
    A += (x[1] - x[0]) / 6.0 * np.array([[2.0, 1.0], [1.0, 2.0]])


def count(A, w, x, marker):
    A += 1.0


def jump(A, w, x, marker):
    A += np.array([1.0, -1.0])


def functional(mesh, *kernels, names=("f", )):
    kernels = kernels or (IntegralKernel(CELL, OTHERWISE, integrate_f), )
    form = VariationalForm(KernelDescriptor(0, coefficient_names=names, integrals=kernels),
                           [], mesh=mesh)
    for name in names:
        form.coefficients().set(name, ConstantFunction(2.0))
    return form


def test_functional(mesh):
    assert assemble(functional(mesh)) == pytest.approx(2.0)


def test_functional_into_tensor(mesh):
    s = ScalarTensor(42.0, group=SerialGroup())
    result = FormAssembler(functional(mesh), DenseFactory()).assemble(tensor=s)
    assert result is s
    assert s.is_assembled
    assert float(s) == pytest.approx(2.0)


def test_linear_form(V, dense_factory):
    form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(CELL, OTHERWISE, integrate_v)]), [V])
    b = assemble(form, factory=dense_factory)
    assert isinstance(b, DenseTensor)
    assert np.allclose(b.values, [0.125, 0.25, 0.25, 0.25, 0.125])


def test_bilinear_form(V, dense_factory):
    form = VariationalForm(KernelDescriptor(2, integrals=[IntegralKernel(CELL, OTHERWISE, mass)]), [V, V])
    A = assemble(form, factory=dense_factory)
    assert A.values.shape == (5, 5)
    assert np.allclose(A.values, A.values.T)
    assert A.values.sum() == pytest.approx(1.0)
    assert A.values[0, 0] == pytest.approx(0.25 / 3)
    assert A.values[1, 1] == pytest.approx(0.25 * 2 / 3)


def test_default_factory_is_scalar_only(V):
    form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(CELL, OTHERWISE, integrate_v)]), [V])
    with pytest.raises(ex.UnsupportedRankError):
        assemble(form)


def test_facet_and_vertex_integrals(mesh):
    form = functional(mesh,
                      IntegralKernel(EXTERIOR_FACET, OTHERWISE, count),
                      IntegralKernel(INTERIOR_FACET, OTHERWISE, count),
                      names=())
    assert assemble(form) == 5.0


def test_interior_facet_block(Q, dense_factory):
    form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(INTERIOR_FACET, OTHERWISE, jump)]), [Q])
    assert form.integrals().max_local_size(INTERIOR_FACET) == 2
    b = assemble(form, factory=dense_factory)
    assert np.allclose(b.values, [1.0, 0.0, 0.0, -1.0])


def test_vertex_integral(V, dense_factory):
    form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(VERTEX, OTHERWISE, count)]), [V])
    b = assemble(form, factory=dense_factory)
    assert np.allclose(b.values, np.ones(5))


class TestSubdomains:

    @staticmethod
    def scaled(scale):
        def kernel(A, w, x, marker):
            A[0] += scale * (x[1] - x[0])
        return kernel

    @pytest.fixture
    def form(self, mesh):
        return functional(mesh,
                          IntegralKernel(CELL, 1, self.scaled(1.0)),
                          IntegralKernel(CELL, 2, self.scaled(10.0)),
                          names=())

    def test_markers_select_kernels(self, form):
        form.set_cell_domains({0: 1, 1: 1, 2: 2, 3: 2})
        assert assemble(form) == pytest.approx(5.5)

    def test_unmarked_entities_use_default(self, mesh):
        form = functional(mesh,
                          IntegralKernel(CELL, OTHERWISE, self.scaled(100.0)),
                          IntegralKernel(CELL, 2, self.scaled(10.0)),
                          names=())
        form.set_cell_domains(np.array([2, 2, 0, 5]))
        assert assemble(form) == pytest.approx(55.0)

    def test_no_markers_no_default(self, form):
        assert assemble(form) == 0.0

    def test_marker_passed_to_kernel(self, mesh):
        seen = []

        def kernel(A, w, x, marker):
            seen.append(marker)

        form = functional(mesh, IntegralKernel(CELL, OTHERWISE, kernel), names=())
        form.set_cell_domains({1: 3})
        assemble(form)
        assert seen == [None, 3, None, None]


class TestErrors:

    def test_missing_coefficient(self, mesh):
        form = functional(mesh, names=("f", "g"))
        form.coefficients().set("g", None)
        s = ScalarTensor(3.0, group=SerialGroup())
        with pytest.raises(ex.ConfigurationError) as e:
            FormAssembler(form, DenseFactory()).assemble(tensor=s)
        assert "g" in str(e.value)
        assert float(s) == 0.0

    def test_kernel_failure_discards_result(self, mesh):
        calls = []

        def kernel(A, w, x, marker):
            calls.append(x)
            if len(calls) == 3:
                raise FloatingPointError("kernel blew up")
            A[0] += 1.0

        s = ScalarTensor(group=SerialGroup())
        form = functional(mesh, IntegralKernel(CELL, OTHERWISE, kernel), names=())
        with pytest.raises(FloatingPointError):
            assemble(form, tensor=s)
        assert float(s) == 0.0

    def test_rank_mismatch(self, V):
        form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(CELL, OTHERWISE, integrate_v)]), [V])
        with pytest.raises(ex.ConfigurationError):
            FormAssembler(form, DenseFactory()).assemble(tensor=ScalarTensor(group=SerialGroup()))

    def test_block_larger_than_scratch(self, mesh, dense_factory):

        class LyingSpace(P1Space):
            def max_local_dofs(self):
                return 1

        form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(CELL, OTHERWISE, integrate_v)]),
                               [LyingSpace(mesh)])
        with pytest.raises(ex.ConfigurationError):
            assemble(form, factory=dense_factory)

    def test_not_a_form(self):
        with pytest.raises(TypeError):
            FormAssembler(object(), DenseFactory())


class TestDistributedAssembly:

    def test_functional(self):
        groups = ThreadGroup.create(3)

        def work(group):
            return assemble(functional(IntervalMesh(7, group=group)))

        assert run_on_group(groups, work) == [pytest.approx(2.0)] * 3

    def test_linear_form(self):
        groups = ThreadGroup.create(3)

        def work(group):
            V = P1Space(IntervalMesh(4, group=group))
            form = VariationalForm(KernelDescriptor(1, integrals=[IntegralKernel(CELL, OTHERWISE, integrate_v)]), [V])
            return assemble(form, factory=DenseFactory()).values

        for b in run_on_group(groups, work):
            assert np.allclose(b, [0.125, 0.25, 0.25, 0.25, 0.125])
