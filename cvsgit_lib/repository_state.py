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

"""This module contains classes that replay commits branch by branch.

Replaying every stream from its start is the ground-truth check that
the grouping of file revisions into commits (and any repair applied
to the streams) still describes a valid history: each revision of a
file on a branch must directly follow the previous one."""


from cvsgit_lib.common import RepositoryConsistencyError
from cvsgit_lib.revision import Revision


class RepositoryBranchState(object):
  """Tracks the versions of all files in the repository on one branch."""

  def __init__(self, branch):
    self.branch = branch

    # A map {filename : Revision} of the last revision seen of each
    # file, whether or not that revision deleted the file:
    self._revisions = {}

    # The names of the files that currently exist on the branch:
    self._live_files = set()

  def __getitem__(self, filename):
    """Return the current revision of FILENAME.

    Return Revision.Empty if the file does not currently exist."""

    if filename in self._live_files:
      return self._revisions[filename]
    else:
      return Revision.Empty

  def __setitem__(self, filename, revision):
    """Set the current revision of the live file FILENAME to REVISION."""

    self._set_revision(filename, revision)
    self._live_files.add(filename)

  def _set_revision(self, filename, revision):
    previous = self._revisions.get(filename, Revision.Empty)

    if not previous.directly_precedes(revision):
      raise RepositoryConsistencyError(
          'Revision r%s of %s on branch %s did not directly follow r%s'
          % (revision, filename, self.branch, str(previous) or '<none>',)
          )

    self._revisions[filename] = revision

  def _get_live_files(self):
    return sorted(self._live_files)

  live_files = property(_get_live_files)

  def apply(self, commit):
    """Apply the file revisions of COMMIT to this branch."""

    for f in commit:
      self._set_revision(f.file.name, f.revision)
      if f.is_dead:
        self._live_files.discard(f.file.name)
      else:
        self._live_files.add(f.file.name)


class RepositoryState(object):
  """Tracks the state of the repository allowing commits to be replayed."""

  def __init__(self):
    # A map {branch name : RepositoryBranchState}:
    self._branches = {}

  def __getitem__(self, branch):
    """Return the state for BRANCH, creating it if necessary."""

    try:
      return self._branches[branch]
    except KeyError:
      state = RepositoryBranchState(branch)
      self._branches[branch] = state
      return state

  def apply(self, commit):
    """Apply COMMIT to the state of its branch."""

    self[commit.branch].apply(commit)
