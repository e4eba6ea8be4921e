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

"""This module contains the Commit class."""


class Commit(object):
  """A set of file revisions that were committed together.

  The file revisions are kept in the order in which they were added,
  which is the order of the files within the physical CVS commit.

  Members:

    commit_id -- (string) the CVS commit id shared by all of the file
        revisions.  Commits that are split keep the id of the original.

    id -- (int or None) the key of this commit within its
        BranchStreamCollection.  It is assigned when the commit is
        added to the collection and never changes afterwards.

    index -- (int or None) the position of this commit within its
        branch stream.  It is maintained by the BranchStreamCollection
        and is only meaningful for comparisons with other commits on
        the same branch.

    merge_from_id -- (int or None) the id of the commit on another
        branch that the merges in this commit were resolved to.  Only
        MergeResolver sets this.

  """

  def __init__(self, commit_id):
    self.commit_id = commit_id
    self.id = None
    self.index = None
    self.merge_from_id = None
    self._file_revisions = []
    self._branch = None

  def add(self, file_revision):
    """Append FILE_REVISION to this commit."""

    self._file_revisions.append(file_revision)
    self._branch = None

  def __iter__(self):
    return iter(self._file_revisions)

  def __len__(self):
    return len(self._file_revisions)

  def __getitem__(self, i):
    return self._file_revisions[i]

  def _get_branch(self):
    if self._branch is None and self._file_revisions:
      self._branch = self._file_revisions[0].branch
    return self._branch

  branch = property(_get_branch)

  def _get_merged_files(self):
    return [f for f in self._file_revisions if not f.mergepoint.is_empty()]

  merged_files = property(_get_merged_files)

  def _get_time(self):
    return max([f.time for f in self._file_revisions])

  time = property(_get_time)

  def _get_author(self):
    return self._file_revisions[0].author

  author = property(_get_author)

  def get_branches(self):
    """Return the set of the names of all branches touched by this commit."""

    return set([f.branch for f in self._file_revisions])

  def get_filenames(self):
    return set([f.file.name for f in self._file_revisions])

  def create_split_commit(self, file_revisions):
    """Return a new Commit with the same commit id and FILE_REVISIONS.

    The new commit is not part of any stream yet."""

    commit = Commit(self.commit_id)
    for file_revision in file_revisions:
      commit.add(file_revision)
    return commit

  def verify(self):
    """Return a list of strings describing problems with this commit.

    A commit is expected to touch a single branch and to contain at
    most one revision of each file."""

    problems = []

    branches = self.get_branches()
    if len(branches) > 1:
      problems.append(
          'Commit %s is on multiple branches: %s'
          % (self.commit_id, ', '.join(sorted(branches)),)
          )

    seen = {}
    for f in self._file_revisions:
      if f.file.name in seen:
        problems.append(
            'Commit %s contains %s twice (r%s and r%s)'
            % (self.commit_id, f.file.name, seen[f.file.name], f.revision,)
            )
      else:
        seen[f.file.name] = f.revision

    return problems

  def __str__(self):
    return self.commit_id

  def __repr__(self):
    return 'Commit(%s [%s])' % (
        self.commit_id, ', '.join([str(f) for f in self._file_revisions]),)
