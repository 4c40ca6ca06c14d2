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

"""Coefficient registries of a :class:`~.VariationalForm`.

Generated kernels address coefficients positionally, so the order in
which coefficients are registered is significant and never changes.
"""

from varform import exceptions as ex


class CoefficientMap:
    """Bidirectional map between coefficient names and positions.

    :arg names: the coefficient names, in kernel order.

    Lookups return ``None`` when nothing is mapped.  Any object providing
    the same :meth:`index` and :meth:`name` methods may be installed on a
    form as a coefficient resolver.
    """

    def __init__(self, names):
        self._names = tuple(names)
        self._indices = {}
        for i, name in enumerate(self._names):
            if name in self._indices:
                raise ex.ConfigurationError("Duplicate coefficient name %r" % name)
            self._indices[name] = i

    def index(self, name):
        return self._indices.get(name)

    def name(self, i):
        if 0 <= i < len(self._names):
            return self._names[i]
        return None

    @property
    def names(self):
        return self._names

    def __len__(self):
        return len(self._names)

    def __repr__(self):
        return "CoefficientMap(%r)" % (self._names, )


class CoefficientSet:
    """Ordered set of the coefficient functions feeding a form's kernels.

    :arg names: the coefficient names, in kernel order.
    :arg original_positions: for each coefficient, its position in the
        form before unused coefficients were dropped.  Defaults to
        ``range(len(names))``.
    """

    def __init__(self, names, original_positions=None):
        self._map = CoefficientMap(names)
        n = len(self._map)
        if original_positions is None:
            original_positions = range(n)
        self._original_positions = tuple(int(p) for p in original_positions)
        if len(self._original_positions) != n:
            raise ex.ConfigurationError("Expected %d original coefficient positions, got %d"
                                        % (n, len(self._original_positions)))
        self._functions = [None] * n

    def _position(self, i):
        if isinstance(i, str):
            return self.index(i)
        if not 0 <= i < len(self._functions):
            raise ex.IndexOutOfRangeError("Coefficient index %d out of range [0, %d)"
                                          % (i, len(self._functions)))
        return i

    def set(self, i, function):
        """Attach ``function`` to coefficient ``i`` (a position or a name)."""
        self._functions[self._position(i)] = function

    def get(self, i):
        """Return the function attached to coefficient ``i``, or ``None``."""
        return self._functions[self._position(i)]

    def index(self, name):
        i = self._map.index(name)
        if i is None:
            raise ex.CoefficientNotFoundError(name)
        return i

    def name(self, i):
        return self._map.name(self._position(i))

    def original_position(self, i):
        return self._original_positions[self._position(i)]

    def missing(self):
        """Names of the coefficients without an attached function."""
        return tuple(name for name, f in self if f is None)

    def __len__(self):
        return len(self._functions)

    def __iter__(self):
        """Yield ``(name, function)`` pairs in kernel order."""
        return zip(self._map.names, self._functions)

    def __repr__(self):
        return "CoefficientSet(%r, %r)" % (self._map.names, self._original_positions)
