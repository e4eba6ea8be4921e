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

"""This module contains classes describing CVS files and their revisions."""


from cvsgit_lib import config
from cvsgit_lib.common import UnknownBranchError
from cvsgit_lib.revision import Revision


class FileInfo(object):
  """Information about a file in CVS.

  Members:

    name -- (string) the path of the file within the repository.  This
        is the identity of the file.

    tags -- (dict) {tag name : Revision} for every normal tag defined
        on the file.

    branches -- (dict) {branch number : branch name} for every branch
        tag defined on the file.  The key is the Revision returned by
        Revision.branch_number (e.g. '1.4.2').

  The tag tables are filled once from the CVS metadata (see add_tag())
  and are not changed afterwards.  A FileInfo is shared by every
  FileRevision and Commit that touches the file."""

  def __init__(self, name):
    self.name = name
    self.tags = {}
    self.branches = {}

    # A map {Revision : Commit} recording the commit that contains
    # each revision of this file:
    self._commits = {}

  def add_tag(self, name, revision):
    """Record the symbol NAME as attached to REVISION.

    Work out whether it is a normal tag or a branch tag from the shape
    of REVISION."""

    if revision.is_branch:
      self.branches[revision.branch_number] = name
    else:
      self.tags[name] = revision

  def get_branch(self, revision):
    """Return the name of the branch that REVISION lies on.

    Raise UnknownBranchError if the branch has no branch tag on this
    file."""

    if revision.is_trunk():
      return config.MAIN_BRANCH

    branch_number = revision.branch_number
    try:
      return self.branches[branch_number]
    except KeyError:
      raise UnknownBranchError(self.name, branch_number, revision)

  def get_branchpoint(self, branch):
    """Return the revision that BRANCH was cut from on this file.

    Return Revision.Empty if BRANCH is not defined on this file."""

    for (branch_number, name) in self.branches.items():
      if name == branch:
        return Revision(branch_number.parts[:-1])
    return Revision.Empty

  def add_commit(self, commit, revision):
    """Record that REVISION of this file is contained in COMMIT."""

    self._commits[revision] = commit

  def get_commit(self, revision):
    """Return the Commit containing REVISION, or None if it is unknown."""

    return self._commits.get(revision)

  def __str__(self):
    return self.name

  def __repr__(self):
    return 'FileInfo(%r)' % (self.name,)


class FileRevision(object):
  """One revision of one file, as read from the CVS log.

  Members:

    file -- (FileInfo) the file that this revision belongs to.

    revision -- (Revision) the revision number.

    mergepoint -- (Revision) the revision on another branch that this
        revision claims to have been merged from, or Revision.Empty.

    time -- (float) the commit time in seconds since the epoch.

    author -- (string) the committer's user name.

    commit_id -- (string) the CVS commit id.

    is_dead -- (bool) True iff this revision deletes the file.

  Instances are not modified after creation."""

  __slots__ = [
      'file',
      'revision',
      'mergepoint',
      'time',
      'author',
      'commit_id',
      'is_dead',
      ]

  def __init__(
        self, file, revision, mergepoint, time, author, commit_id,
        is_dead=False,
        ):
    self.file = file
    self.revision = revision
    self.mergepoint = mergepoint
    self.time = time
    self.author = author
    self.commit_id = commit_id
    self.is_dead = is_dead

  def _get_branch(self):
    return self.file.get_branch(self.revision)

  branch = property(_get_branch)

  def __str__(self):
    if self.is_dead:
      return '%s r%s (dead)' % (self.file.name, self.revision,)
    else:
      return '%s r%s' % (self.file.name, self.revision,)

  def __repr__(self):
    return 'FileRevision(%s)' % (self,)
