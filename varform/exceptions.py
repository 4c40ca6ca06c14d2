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

"""varform exception types"""


class DataTypeError(TypeError):

    """Invalid type for data."""


class GroupTypeError(TypeError):

    """Invalid type for a distributed group."""


class DataValueError(ValueError):

    """Illegal value for data."""


class ModeValueError(ValueError):

    """Illegal value for an apply mode."""


class IndexOutOfRangeError(IndexError):

    """Argument or coefficient index out of range."""


class CoefficientNotFoundError(KeyError):

    """No coefficient is mapped to the requested name or index."""


class ConfigurationError(RuntimeError):

    """Inconsistent form, assembly or configuration setup."""


class UnsupportedOperationError(RuntimeError):

    """Operation is not defined for a tensor of this rank."""


class UnsupportedRankError(UnsupportedOperationError):

    """Tensor realisation only supports a fixed rank."""


class CommunicationError(RuntimeError):

    """A collective operation over a distributed group failed."""
