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

"""varform global configuration."""

import os

from varform.exceptions import ConfigurationError


def _parse_flag(text):
    return bool(int(text))


def _parse_level(text):
    return int(text) if text.isdigit() else text


class Configuration(dict):
    r"""varform configuration parameters

    :param type_check: Should varform check the types of arguments to
        its public constructors?  (Default, yes)
    :param log_level: How chatty should varform be?  A level name such as
        "DEBUG" or "WARNING", or a numeric level.
    :param spmd_strict: Guard calls marked with @collective with a
        group-wide synchronisation.  Slow, but useful for tracking down
        deadlocks in :meth:`~.GenericTensor.apply`. (Default no)

    Each default may be overridden by the environment variable given
    in :attr:`DEFAULTS`.
    """
    # name: (env variable, accepted types, parser, default)
    DEFAULTS = {
        "type_check": ("VARFORM_TYPE_CHECK", bool, _parse_flag, True),
        "log_level": ("VARFORM_LOG_LEVEL", (str, int), _parse_level, "WARNING"),
        "spmd_strict": ("VARFORM_SPMD_STRICT", bool, _parse_flag, False),
    }

    def __init__(self):
        self._defaults = {}
        for key, (env, _, parse, default) in Configuration.DEFAULTS.items():
            text = os.environ.get(env)
            if text is None:
                self._defaults[key] = default
                continue
            try:
                self._defaults[key] = parse(text)
            except ValueError:
                raise ValueError("Cannot convert value %r of environment variable %s" % (text, env))
        super().__init__(self._defaults)

    def reset(self):
        """Restore the values read at start-up."""
        self.update(self._defaults)

    def reconfigure(self, **kwargs):
        """Set several parameters at once, validating each."""
        for k, v in kwargs.items():
            self[k] = v

    def __setitem__(self, key, value):
        if key in Configuration.DEFAULTS:
            valid_type = Configuration.DEFAULTS[key][1]
            if not isinstance(value, valid_type):
                raise ConfigurationError("Values for configuration key %s must be of type %r, not %r"
                                         % (key, valid_type, type(value)))
        super().__setitem__(key, value)


configuration = Configuration()
