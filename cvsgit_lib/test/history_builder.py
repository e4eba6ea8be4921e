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

"""Helpers for building small CVS histories in unit tests."""

import io

from cvsgit_lib.log import logger
from cvsgit_lib.context import Ctx
from cvsgit_lib.revision import Revision
from cvsgit_lib.file_info import FileInfo
from cvsgit_lib.file_info import FileRevision
from cvsgit_lib.commit import Commit
from cvsgit_lib.commit_list import add_commits_to_files
from cvsgit_lib.branch_streams import BranchStreamCollection


def quiet_logger():
  """Send all log output to a fresh buffer and return the buffer."""

  out = io.StringIO()
  logger.set_output(out)
  logger.log_level = logger.NORMAL
  logger.indentation = 0
  Ctx().set_defaults()
  return out


class HistoryBuilder(object):
  """Build the files and commits of a test history.

  Files are created on first use.  Each commit is given as a list of
  (filename, revision) or (filename, revision, mergepoint) tuples;
  revisions are strings like '1.2'."""

  def __init__(self):
    self.files = {}
    self.commits = []
    self._time = 0

  def get_file(self, name):
    try:
      return self.files[name]
    except KeyError:
      file = FileInfo(name)
      self.files[name] = file
      return file

  def tag(self, tag, *file_revisions):
    """Tag each of FILE_REVISIONS, a list of (filename, revision)."""

    for (filename, revision) in file_revisions:
      self.get_file(filename).add_tag(tag, Revision.create(revision))

  def branch(self, branch, branch_number, *filenames):
    """Define BRANCH with tag number BRANCH_NUMBER on FILENAMES."""

    for filename in filenames:
      self.get_file(filename).add_tag(branch, Revision.create(branch_number))

  def commit(self, commit_id, *file_revisions, **kw):
    """Append a commit with FILE_REVISIONS and return it.

    The keyword argument 'dead' lists the files that the commit
    deletes."""

    dead = kw.get('dead', ())
    self._time += 1
    commit = Commit(commit_id)
    for t in file_revisions:
      (filename, revision) = t[:2]
      if len(t) > 2:
        mergepoint = Revision.create(t[2])
      else:
        mergepoint = Revision.Empty
      commit.add(FileRevision(
          self.get_file(filename), Revision.create(revision), mergepoint,
          self._time, 'fred', commit_id, is_dead=(filename in dead),
          ))
    self.commits.append(commit)
    return commit

  def build_streams(self, branchpoints=None):
    """Index the commits and return a BranchStreamCollection of them."""

    if branchpoints is None:
      branchpoints = {}

    return BranchStreamCollection(
        add_commits_to_files(self.commits), branchpoints
        )


def get_stream(streams, branch):
  """Return the list of commits on BRANCH."""

  return list(streams.iter_branch(branch))


def describe(commit):
  """Return COMMIT's file revisions as a list of 'file@rev' strings."""

  return ['%s@%s' % (f.file.name, f.revision,) for f in commit]


