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

"""This module contains common facilities used by cvsgit."""


# Warnings and errors start with these strings.  They are typically
# followed by a colon and a space, as in "%s: " ==> "WARNING: ".
warning_prefix = "WARNING"
error_prefix = "ERROR"


class FatalException(Exception):
  """Exception thrown on a non-recoverable error.

  If this exception is thrown by main(), it is caught by the global
  layer of the program, its string representation is printed (followed
  by a newline), and the program is ended with an exit code of 1."""

  pass


class InternalError(Exception):
  """Exception thrown in the case of a cvsgit internal error (aka, bug)."""

  pass


class FatalError(FatalException):
  """A FatalException that prepends error_prefix to the message."""

  def __init__(self, msg):
    """Use (error_prefix + ': ' + MSG) as the error message."""

    FatalException.__init__(self, '%s: %s' % (error_prefix, msg,))


class RepositoryConsistencyError(FatalError):
  """The commit streams no longer describe a valid per-file history.

  This is raised when a branch replay finds a revision that does not
  directly follow the previous revision of the same file, and when a
  stream modification would make that happen.  It always indicates
  that the grouping of revisions into commits (or a repair applied to
  it) is wrong."""

  pass


class UnknownBranchError(FatalError):
  """A file revision lies on a branch for which no branch tag exists."""

  def __init__(self, filename, branch_number, revision):
    self.filename = filename
    self.branch_number = branch_number
    self.revision = revision
    FatalError.__init__(
        self,
        'Branch with stem %s not found on file %s when looking for r%s'
        % (branch_number, filename, revision,)
        )


class ImportFailedError(FatalError):
  """A phase of the import failed as a whole.

  The individual problems have been logged before this is raised."""

  pass
