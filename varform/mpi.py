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

"""Distributed groups of cooperating processes.

A :class:`DistributedGroup` is the only communication primitive used by
varform: tensors reduce their partial values over it when they are
finalised with :meth:`~.GenericTensor.apply`.  The minimal surface is
the number of processes, the calling process's rank, and an all-gather
returning one value per process ordered by rank.
"""

import abc
from inspect import cleandoc
from functools import wraps

from mpi4py import MPI  # noqa

from varform.configuration import configuration
from varform.exceptions import CommunicationError, GroupTypeError
from varform.logger import debug


__all__ = (
    "COMM_WORLD",
    "COMM_SELF",
    "MPI",
    "DistributedGroup",
    "MPIGroup",
    "SerialGroup",
    "as_group",
    "collective",
)

COMM_WORLD = MPI.COMM_WORLD
COMM_SELF = MPI.COMM_SELF


if configuration["spmd_strict"]:
    def collective(fn):
        extra = cleandoc("""
        This function is logically collective over a distributed group, it
        is an error to call it on fewer than all the processes in the group.
        VARFORM_SPMD_STRICT=1 is in your environment and function calls will
        be guarded by a group-wide synchronisation where possible.
        """)

        @wraps(fn)
        def wrapper(*args, **kwargs):
            groups = filter(
                lambda arg: isinstance(arg, DistributedGroup),
                args + tuple(kwargs.values())
            )
            try:
                group = next(groups)
            except StopIteration:
                if args and isinstance(getattr(args[0], "group", None), DistributedGroup):
                    group = args[0].group
                else:
                    group = None

            if group is None:
                debug(
                    "`@collective` wrapper found no group in args or kwargs, "
                    "this means that the call is implicitly collective over an "
                    "unknown group. "
                    f"The following call to {fn.__module__}.{fn.__qualname__} is "
                    "not synchronised."
                )
                prefix = "UNKNOWN group: "
            else:
                prefix = f"{group!r} R{group.rank()}: "

            debug(prefix + f"Entering {fn.__module__}.{fn.__qualname__}")
            if group is not None:
                group.all_gather(None)
            value = fn(*args, **kwargs)
            debug(prefix + f"Leaving {fn.__module__}.{fn.__qualname__}")
            if group is not None:
                group.all_gather(None)
            return value

        wrapper.__doc__ = f"{cleandoc(fn.__doc__)}\n\n{extra}" if fn.__doc__ else extra
        return wrapper
else:
    def collective(fn):
        extra = cleandoc("""
        This function is logically collective over a distributed group, it
        is an error to call it on fewer than all the processes in the group.
        You can set VARFORM_SPMD_STRICT=1 in your environment to try and catch
        non-collective calls.
        """)
        fn.__doc__ = f"{cleandoc(fn.__doc__)}\n\n{extra}" if fn.__doc__ else extra
        return fn


class DistributedGroup(abc.ABC):
    """A group of processes taking part in collective operations."""

    @abc.abstractmethod
    def process_count(self):
        """Number of processes in the group."""

    @abc.abstractmethod
    def rank(self):
        """Rank of the calling process, ``0 <= rank < process_count()``."""

    @abc.abstractmethod
    def all_gather(self, value):
        """Gather ``value`` from every process.

        :arg value: the local contribution.
        :returns: a list of every process's contribution, ordered by rank.
        :raises CommunicationError: if the collective fails.
        """


class MPIGroup(DistributedGroup):
    """A :class:`DistributedGroup` over an mpi4py communicator.

    :arg comm: the communicator (defaults to ``COMM_WORLD``).
    """

    def __init__(self, comm=None):
        comm = COMM_WORLD if comm is None else comm
        if comm == MPI.COMM_NULL:
            raise GroupTypeError("MPI_COMM_NULL passed to MPIGroup")
        elif not isinstance(comm, MPI.Comm):
            raise GroupTypeError("Don't know how to build a group from a %r" % type(comm))
        self.comm = comm

    def process_count(self):
        return self.comm.size

    def rank(self):
        return self.comm.rank

    def all_gather(self, value):
        try:
            return self.comm.allgather(value)
        except MPI.Exception as e:
            raise CommunicationError("allgather failed on %s rank %d: %s"
                                     % (self.comm.name, self.comm.rank, e)) from e

    def __repr__(self):
        return "MPIGroup(%s)" % (self.comm.name or self.comm.py2f())


class SerialGroup(DistributedGroup):
    """A group containing only the calling process."""

    def process_count(self):
        return 1

    def rank(self):
        return 0

    def all_gather(self, value):
        return [value]

    def __repr__(self):
        return "SerialGroup()"


def as_group(group):
    """Return a :class:`DistributedGroup` for ``group``.

    :arg group: a :class:`DistributedGroup` (returned unchanged), an
        mpi4py communicator, or ``None`` for ``COMM_WORLD``.
    """
    if isinstance(group, DistributedGroup):
        return group
    elif group is None or isinstance(group, MPI.Comm):
        return MPIGroup(group)
    else:
        raise GroupTypeError("Cannot build a distributed group from a %r" % type(group))
