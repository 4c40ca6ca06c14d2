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

"""Common utility functions."""

import numpy as np
from decorator import decorator

from varform.exceptions import DataTypeError, DataValueError
from varform.configuration import configuration


def as_tuple(item, type=None, length=None):
    """Return ``item`` as a tuple.

    ``None`` gives the empty tuple, an iterable is converted and anything
    else is repeated ``length`` times (once if no length is given).  If
    type checking is enabled, the length and item types are verified.
    """
    if item is None:
        t = ()
    else:
        try:
            t = tuple(item)
        except TypeError:
            t = (item, ) * (length or 1)
    if configuration["type_check"]:
        if length is not None and len(t) != length:
            raise ValueError("Expected %d items, got %d" % (length, len(t)))
        if type is not None and not all(isinstance(i, type) for i in t):
            raise TypeError("Items need to be of type %s" % type)
    return t


class validate_type:

    """Decorator to validate argument types

    The decorator expects one or more arguments, which are 3-tuples of
    (name, type, exception), where name is the argument name in the
    function being decorated, type is the argument type to be validated
    and exception is the exception type to be raised if validation fails.
    An argument left at its default value is always accepted.

    Only one :class:`validate_type` may decorate a given function, list
    all of its checks in that one decorator."""

    def __init__(self, *checks):
        self._checks = checks

    def __call__(self, f):
        code = f.__code__
        argnames = code.co_varnames[:code.co_argcount]
        defaults = f.__defaults__ or ()
        first_default = len(argnames) - len(defaults)
        where = "%s:%d" % (code.co_filename, code.co_firstlineno + 1)
        checks = []
        for name, argtype, exception in self._checks:
            if name not in argnames:
                raise ValueError("%s has no parameter %r to validate" % (f.__qualname__, name))
            i = argnames.index(name)
            default = defaults[i - first_default] if i >= first_default else _no_default
            checks.append((name, i, default, argtype, exception))

        def wrapper(f, *args, **kwargs):
            if configuration["type_check"]:
                for name, i, default, argtype, exception in checks:
                    if name in kwargs:
                        arg = kwargs[name]
                    elif i < len(args):
                        arg = args[i]
                    else:
                        continue
                    if arg is not default and not isinstance(arg, argtype):
                        raise exception("%s Parameter %s must be of type %r, not %r"
                                        % (where, name, argtype, type(arg)))
            return f(*args, **kwargs)
        return decorator(wrapper, f)


_no_default = object()


def verify_reshape(data, dtype, shape):
    """Convert ``data`` to a numpy array of ``dtype`` with ``shape``."""
    if data is None:
        raise DataValueError("Invalid data: None is not allowed!")
    try:
        a = np.asarray(data, dtype=dtype)
    except ValueError:
        raise DataValueError("Invalid data: cannot convert to %s!" % np.dtype(dtype))
    except TypeError:
        raise DataTypeError("Invalid data type for %s: %s" % (np.dtype(dtype), type(data)))
    try:
        return a.reshape(shape)
    except ValueError:
        raise DataValueError("Invalid data: cannot reshape %d values to %s!" % (a.size, shape))
