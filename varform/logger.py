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

"""The varform logger, based on the Python standard library logging module."""

from contextlib import contextmanager
import logging
import threading

logger = logging.getLogger('varform')
logger.addHandler(logging.StreamHandler())

debug = logger.debug
error = logger.error

DEBUG = logging.DEBUG
INFO = logging.INFO


def set_log_level(level):
    '''Set the log level of the varform logger.

    :arg level: a level name (``"DEBUG"``, ``"INFO"``, ...) or number.'''
    logger.setLevel(level)


# Nesting depth of progress messages, per thread.
_nesting = threading.local()


@contextmanager
def progress(level, msg, *args):
    """Log ``msg...`` on entering the block and ``msg...done`` on leaving it.

    Nested progress messages are indented by two spaces per level.  If
    the block raises, the closing message reads ``msg...failed`` and the
    exception propagates.

    :arg level: the logging level of both messages.
    :arg msg: the message, formatted with ``args``.
    """
    depth = getattr(_nesting, "depth", 0)
    indent = ' ' * depth
    logger.log(level, indent + msg + '...', *args)
    _nesting.depth = depth + 2
    try:
        yield
    except Exception:
        logger.log(level, indent + msg + '...failed', *args)
        raise
    finally:
        _nesting.depth = depth
    logger.log(level, indent + msg + '...done', *args)
