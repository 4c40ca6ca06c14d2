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

import pytest

from varform import exceptions as ex
from varform.integrals import IntegralSet
from varform.kernel import (IntegralKernel, CELL, EXTERIOR_FACET, INTERIOR_FACET,
                            VERTEX, OTHERWISE)


def noop(A, w, geometry, marker):
    pass


@pytest.fixture
def kernels():
    return [IntegralKernel(CELL, OTHERWISE, noop),
            IntegralKernel(CELL, 3, noop),
            IntegralKernel(CELL, 1, noop),
            IntegralKernel("interior_facet", OTHERWISE, noop),
            IntegralKernel(EXTERIOR_FACET, 2, noop)]


@pytest.fixture
def integrals(kernels):
    return IntegralSet(kernels, (3, 4))


def test_has_integrals(integrals):
    assert integrals.has_integrals(CELL)
    assert integrals.has_integrals("exterior_facet")
    assert integrals.has_integrals(INTERIOR_FACET)
    assert not integrals.has_integrals(VERTEX)


def test_counts(integrals):
    assert len(integrals) == 5
    assert integrals.num_integrals(CELL) == 3
    assert integrals.num_integrals(VERTEX) == 0
    assert integrals.integral_ids(CELL) == (1, 3)
    assert integrals.integral_ids(INTERIOR_FACET) == ()


def test_lookup(integrals, kernels):
    assert integrals.get(CELL, 3) is kernels[1]
    assert integrals.get(CELL, 7) is kernels[0]
    assert integrals.default(CELL) is kernels[0]
    assert integrals.get(EXTERIOR_FACET, 2) is kernels[4]
    assert integrals.get(EXTERIOR_FACET, 1) is None
    assert integrals.default(EXTERIOR_FACET) is None


def test_max_local_size(integrals):
    assert integrals.max_local_size(CELL) == 12
    assert integrals.max_local_size(EXTERIOR_FACET) == 12
    assert integrals.max_local_size(INTERIOR_FACET) == 48
    assert integrals.max_local_size(VERTEX) == 0


def test_max_local_size_functional():
    integrals = IntegralSet([IntegralKernel(CELL, OTHERWISE, noop),
                             IntegralKernel(INTERIOR_FACET, OTHERWISE, noop)])
    assert integrals.max_local_size(CELL) == 1
    assert integrals.max_local_size(INTERIOR_FACET) == 1


def test_duplicate_integral():
    with pytest.raises(ex.ConfigurationError):
        IntegralSet([IntegralKernel(CELL, 1, noop), IntegralKernel(CELL, 1, noop)], (2, ))


def test_unknown_integral_type():
    with pytest.raises(ex.ConfigurationError):
        IntegralSet([IntegralKernel("ridge", 1, noop)], (2, ))
