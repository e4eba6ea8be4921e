# (Be in -*- python -*- mode.)
#
# ====================================================================
# Copyright (c) 2000-2009 CollabNet.  All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.  The terms
# are also available at http://subversion.tigris.org/license-1.html.
# If newer versions of this license are posted there, you may use a
# newer version instead, at your option.
#
# This software consists of voluntary contributions made by many
# individuals.  For exact contribution history, see the revision
# history and logs, available at http://cvs2svn.tigris.org/.
# ====================================================================

"""This module contains a simple logging facility for cvsgit.

Besides the usual log levels, the logger keeps track of an indentation
level so that the resolvers can narrate nested work:

  logger.double_rule_off()
  logger.normal('Resolving merges...')
  with logger.indent():
    logger.normal('Merges from dev to MAIN are crossed')

Rule lines and blank lines are written at the NORMAL level."""


import sys
import time
import threading

from cvsgit_lib import config


class _Indentation(object):
  """A scope that increases the logger's indentation while it is active.

  The indentation that was in effect when the scope was entered is
  restored when it is left, however it is left."""

  def __init__(self, log):
    self._log = log
    self._previous = None

  def __enter__(self):
    self._log.lock.acquire()
    try:
      self._previous = self._log.indentation
      self._log.indentation = self._previous + 1
    finally:
      self._log.lock.release()
    return self

  def __exit__(self, exc_type, exc_value, traceback):
    self._log.lock.acquire()
    try:
      self._log.indentation = self._previous
    finally:
      self._log.lock.release()
    return False


class _Log:
  """A Simple logging facility.

  If self.log_level is DEBUG or higher, each line will be timestamped
  with the number of wall-clock seconds since the time when this
  module was first imported.

  The public methods of this class are thread-safe."""

  # These constants represent the log levels that this class supports.
  # The increase_verbosity() and decrease_verbosity() methods rely on
  # these constants being consecutive integers:
  ERROR = -2
  WARN = -1
  QUIET = 0
  NORMAL = 1
  VERBOSE = 2
  DEBUG = 3

  start_time = time.time()

  def __init__(self):
    self.log_level = _Log.NORMAL

    # The number of indentation steps in front of every line:
    self.indentation = 0

    # The output file to use for errors:
    self._err = sys.stderr

    # The output file to use for lower-priority messages.  These go to
    # stderr as well, so that the streams handed on to the output
    # stage are never mixed up with progress messages:
    self._out = sys.stderr

    # Lock to serialize writes to the log:
    self.lock = threading.Lock()

  def set_output(self, out, err=None):
    """Send lower-priority messages to OUT and errors to ERR.

    If ERR is not specified, errors go to OUT as well."""

    self.lock.acquire()
    try:
      self._out = out
      if err is None:
        self._err = out
      else:
        self._err = err
    finally:
      self.lock.release()

  def increase_verbosity(self):
    self.lock.acquire()
    try:
      self.log_level = min(self.log_level + 1, _Log.DEBUG)
    finally:
      self.lock.release()

  def decrease_verbosity(self):
    self.lock.acquire()
    try:
      self.log_level = max(self.log_level - 1, _Log.ERROR)
    finally:
      self.lock.release()

  def is_on(self, level):
    """Return True iff messages at the specified LEVEL are currently on.

    LEVEL should be one of the constants _Log.WARN, _Log.QUIET, etc."""

    return self.log_level >= level

  def indent(self):
    """Return a context manager that indents the lines written within it."""

    return _Indentation(self)

  def _timestamp(self):
    """Return a timestamp if needed, as a string with a trailing space."""

    retval = []

    if self.log_level >= _Log.DEBUG:
      retval.append('%f: ' % (time.time() - self.start_time,))

    return ''.join(retval)

  def _write(self, out, *args):
    """Write a message to OUT.

    If there are multiple ARGS, they will be separated by spaces.  If
    there are multiple lines, they will be output one by one with the
    same timestamp prefix and the current indentation."""

    timestamp = self._timestamp()
    s = ' '.join(map(str, args))
    lines = s.split('\n')
    if lines and not lines[-1]:
      del lines[-1]

    self.lock.acquire()
    try:
      prefix = config.LOG_INDENT * self.indentation
      for s in lines:
        if s:
          out.write('%s%s%s\n' % (timestamp, prefix, s,))
        else:
          out.write('\n')
      # Ensure that log output doesn't get out-of-order with respect to
      # stderr output.
      out.flush()
    finally:
      self.lock.release()

  def write(self, *args):
    """Write a message to SELF._out.

    This is a public method to use for writing to the output log
    unconditionally."""

    self._write(self._out, *args)

  def blank(self):
    """Write an empty line at the NORMAL level."""

    if self.is_on(_Log.NORMAL):
      self._write(self._out, '\n')

  def rule_off(self):
    """Write a single rule line at the NORMAL level."""

    if self.is_on(_Log.NORMAL):
      self._write(self._out, '-' * config.LOG_RULE_WIDTH)

  def double_rule_off(self):
    """Write a double rule line at the NORMAL level."""

    if self.is_on(_Log.NORMAL):
      self._write(self._out, '=' * config.LOG_RULE_WIDTH)

  def error(self, *args):
    """Log a message at the ERROR level."""

    if self.is_on(_Log.ERROR):
      self._write(self._err, *args)

  def warn(self, *args):
    """Log a message at the WARN level."""

    if self.is_on(_Log.WARN):
      self._write(self._out, *args)

  def quiet(self, *args):
    """Log a message at the QUIET level."""

    if self.is_on(_Log.QUIET):
      self._write(self._out, *args)

  def normal(self, *args):
    """Log a message at the NORMAL level."""

    if self.is_on(_Log.NORMAL):
      self._write(self._out, *args)

  def verbose(self, *args):
    """Log a message at the VERBOSE level."""

    if self.is_on(_Log.VERBOSE):
      self._write(self._out, *args)

  def debug(self, *args):
    """Log a message at the DEBUG level."""

    if self.is_on(_Log.DEBUG):
      self._write(self._out, *args)


# Create an instance that everybody can use:
logger = _Log()
