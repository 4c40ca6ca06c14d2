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

"""Per-entity subdomain markers."""

import numpy as np

from varform.kernel import as_integral_type


class _NoMarkers:
    """Sentinel for "no subdomain markers have been set"."""

    def __bool__(self):
        return False

    def __repr__(self):
        return "NO_MARKERS"

    def __reduce__(self):
        return "NO_MARKERS"


NO_MARKERS = _NoMarkers()


class DomainMarkers:
    """Read-only view of a map from mesh entity to integer subdomain marker.

    :arg markers: a mapping from entity id to marker, or an array indexed
        by entity id.  It is not copied: the view shares the mesh-level
        marking data.
    :arg integral_type: the kind of entity being marked.
    """

    def __init__(self, markers, integral_type):
        self._markers = markers
        self.integral_type = as_integral_type(integral_type)

    def __getitem__(self, entity):
        if isinstance(self._markers, np.ndarray) and entity not in self:
            raise IndexError("No %s entity %r among %d marked entities"
                             % (self.integral_type.value, entity, len(self._markers)))
        return int(self._markers[entity])

    def get(self, entity, default=None):
        try:
            return self[entity]
        except (KeyError, IndexError):
            return default

    def __contains__(self, entity):
        if isinstance(self._markers, np.ndarray):
            return 0 <= entity < len(self._markers)
        return entity in self._markers

    def __len__(self):
        return len(self._markers)

    def values(self):
        """The distinct markers, sorted."""
        if isinstance(self._markers, np.ndarray):
            return tuple(int(m) for m in np.unique(self._markers))
        return tuple(sorted(set(int(m) for m in self._markers.values())))

    def __repr__(self):
        return "DomainMarkers(%s, %d entities)" % (self.integral_type.value, len(self))


def as_domain_markers(markers, integral_type):
    """Wrap ``markers`` as :class:`DomainMarkers`, ``None`` gives :data:`NO_MARKERS`."""
    if markers is None or markers is NO_MARKERS:
        return NO_MARKERS
    elif isinstance(markers, DomainMarkers):
        return markers
    return DomainMarkers(markers, integral_type)
