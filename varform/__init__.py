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

"""Variational forms and the distributed tensor assembly contract."""

from varform.configuration import configuration
from varform.logger import set_log_level
from varform.exceptions import *  # noqa: F401,F403
from varform.mpi import COMM_WORLD, COMM_SELF, MPIGroup, SerialGroup, as_group  # noqa: F401
from varform.kernel import (IntegralType, IntegralKernel, KernelDescriptor,  # noqa: F401
                            CELL, EXTERIOR_FACET, INTERIOR_FACET, VERTEX, OTHERWISE)
from varform.coefficients import CoefficientMap, CoefficientSet  # noqa: F401
from varform.integrals import IntegralSet  # noqa: F401
from varform.markers import DomainMarkers, NO_MARKERS  # noqa: F401
from varform.form import VariationalForm  # noqa: F401
from varform.tensor import (GenericTensor, ScalarTensor, TensorFactory,  # noqa: F401
                            ScalarFactory, ADD)
from varform.assemble import assemble, FormAssembler  # noqa: F401

set_log_level(configuration["log_level"])
