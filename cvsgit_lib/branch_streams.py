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

"""This module contains the BranchStreamCollection class.

A branch stream is the linear sequence of commits made on one branch.
The collection owns every commit that is part of a stream; commits are
stored in a map keyed by their integer id, and the links between them
(successor, predecessor, branchpoint and merge source) are stored as
ids as well.  Only the collection changes the order of a stream or the
index of a commit."""


from cvsgit_lib.common import InternalError
from cvsgit_lib.common import RepositoryConsistencyError
from cvsgit_lib.log import logger


class BranchStreamCollection(object):
  """The per-branch commit streams of a repository."""

  def __init__(self, commits, branchpoints):
    """Split COMMITS into one stream per branch.

    COMMITS is the full ordered sequence of commits, each of which must
    touch a single branch.  The relative order of the commits on each
    branch is preserved.  BRANCHPOINTS is a map {branch name : Commit}
    giving the commit on the parent branch from which each branch was
    cut; those commits must be contained in COMMITS."""

    # A map {id : Commit} of all commits in any stream:
    self._commits = {}

    # The branch names, in the order in which they were first seen:
    self._branches = []

    # Maps {branch name : id} of the first and last commit of each
    # stream:
    self._heads = {}
    self._tails = {}

    # Maps {id : id or None} linking the commits of a stream:
    self._successors = {}
    self._predecessors = {}

    # A map {branch name : id} of the branchpoint of each branch:
    self._branchpoints = {}

    self._next_id = 1

    for commit in commits:
      self._append(commit)

    for (branch, commit) in branchpoints.items():
      if self._commits.get(commit.id) is not commit:
        raise InternalError(
            'Branchpoint %s of branch %s is not part of any stream'
            % (commit, branch,)
            )
      self._branchpoints[branch] = commit.id

  def _register(self, commit):
    if commit.id is not None:
      raise InternalError('Commit %s is already part of a stream' % (commit,))
    if not len(commit):
      raise InternalError('Commit %s is empty' % (commit,))

    commit.id = self._next_id
    self._next_id += 1
    self._commits[commit.id] = commit

  def _append(self, commit):
    self._register(commit)
    branch = commit.branch

    tail_id = self._tails.get(branch)
    if tail_id is None:
      self._branches.append(branch)
      self._heads[branch] = commit.id
      commit.index = 0
    else:
      self._successors[tail_id] = commit.id
      commit.index = self._commits[tail_id].index + 1

    self._predecessors[commit.id] = tail_id
    self._successors[commit.id] = None
    self._tails[branch] = commit.id

  def _get_branches(self):
    return list(self._branches)

  branches = property(_get_branches)

  def __getitem__(self, branch):
    """Return the first commit of the stream for BRANCH."""

    return self._commits[self._heads[branch]]

  def __contains__(self, branch):
    return branch in self._heads

  def __len__(self):
    return len(self._commits)

  def iter_branch(self, branch):
    """Yield the commits of the stream for BRANCH in order."""

    id = self._heads.get(branch)
    while id is not None:
      yield self._commits[id]
      id = self._successors[id]

  def __iter__(self):
    """Yield all commits, branch by branch, each branch in stream order."""

    for branch in self._branches:
      for commit in self.iter_branch(branch):
        yield commit

  def get_commit(self, id):
    return self._commits[id]

  def _get_linked(self, id):
    if id is None:
      return None
    return self._commits[id]

  def successor(self, commit):
    """Return the commit after COMMIT in its stream, or None."""

    return self._get_linked(self._successors[commit.id])

  def predecessor(self, commit):
    """Return the commit before COMMIT in its stream, or None."""

    return self._get_linked(self._predecessors[commit.id])

  def get_branchpoint(self, branch):
    """Return the commit BRANCH was cut from, or None if it is unknown."""

    return self._get_linked(self._branchpoints.get(branch))

  def get_merge_from(self, commit):
    """Return the commit that COMMIT's merges were resolved to, or None."""

    return self._get_linked(commit.merge_from_id)

  def get_branches_cut_from(self, commit):
    """Return the names of the branches whose branchpoint is COMMIT."""

    return sorted([
        branch
        for (branch, id) in self._branchpoints.items()
        if id == commit.id
        ])

  def _get_passed_commits(self, commit, after):
    """Return the commits that COMMIT would pass over if moved after AFTER."""

    passed = []
    if commit.index < after.index:
      c = self.successor(commit)
      while c is not None:
        passed.append(c)
        if c is after:
          break
        c = self.successor(c)
    else:
      c = self.successor(after)
      while c is not None and c is not commit:
        passed.append(c)
        c = self.successor(c)

    return passed

  def check_move(self, commit, after):
    """Return a description of why COMMIT cannot be moved after AFTER.

    Return None if the move is allowed.  This method never changes
    the streams."""

    for c in (commit, after):
      if self._commits.get(c.id) is not c:
        return 'Commit %s is not part of any stream' % (c,)

    if commit.branch != after.branch:
      return (
          'Cannot move commit %s on branch %s after commit %s on branch %s'
          % (commit, commit.branch, after, after.branch,)
          )

    if after is commit or self.predecessor(commit) is after:
      return None

    passed = self._get_passed_commits(commit, after)

    cut_branches = self.get_branches_cut_from(commit)
    if cut_branches:
      return (
          'Cannot move commit %s because branch %s is cut from it'
          % (commit, cut_branches[0],)
          )

    filenames = commit.get_filenames()
    for c in passed:
      cut_branches = self.get_branches_cut_from(c)
      if cut_branches:
        return (
            'Moving commit %s after %s would move it past the branchpoint '
            'of branch %s'
            % (commit, after, cut_branches[0],)
            )

      common = filenames & c.get_filenames()
      if common:
        return (
            'Moving commit %s after %s would reorder revisions of %s '
            'relative to commit %s'
            % (commit, after, ', '.join(sorted(common)), c,)
            )

    return None

  def _unlink(self, commit):
    pred_id = self._predecessors[commit.id]
    succ_id = self._successors[commit.id]

    if pred_id is None:
      self._heads[commit.branch] = succ_id
    else:
      self._successors[pred_id] = succ_id

    if succ_id is None:
      self._tails[commit.branch] = pred_id
    else:
      self._predecessors[succ_id] = pred_id

    self._predecessors[commit.id] = None
    self._successors[commit.id] = None

  def _link_after(self, commit, pred_id):
    """Link COMMIT into its stream after the commit with id PRED_ID.

    If PRED_ID is None, COMMIT becomes the head of the stream."""

    branch = commit.branch
    if pred_id is None:
      succ_id = self._heads.get(branch)
      self._heads[branch] = commit.id
    else:
      succ_id = self._successors[pred_id]
      self._successors[pred_id] = commit.id

    if succ_id is None:
      self._tails[branch] = commit.id
    else:
      self._predecessors[succ_id] = commit.id

    self._predecessors[commit.id] = pred_id
    self._successors[commit.id] = succ_id

  def _renumber(self, commit, index):
    """Renumber COMMIT and all commits after it, starting with INDEX."""

    while commit is not None:
      commit.index = index
      index += 1
      commit = self.successor(commit)

  def move_commit(self, commit, after):
    """Move COMMIT so that it directly follows AFTER in its stream.

    Raise RepositoryConsistencyError if AFTER is on another branch or
    if the move would cross a branchpoint or reorder two revisions of
    the same file."""

    problem = self.check_move(commit, after)
    if problem is not None:
      raise RepositoryConsistencyError(problem)

    if after is commit or self.predecessor(commit) is after:
      return

    logger.verbose('Moving commit %s after %s' % (commit, after,))

    if commit.index < after.index:
      first = self.successor(commit)
    else:
      first = commit
    index = min(commit.index, after.index + 1)

    self._unlink(commit)
    self._link_after(commit, after.id)
    self._renumber(first, index)

  def split_commit(self, commit, first_files):
    """Split COMMIT into two commits and return them as a tuple.

    The first commit contains the file revisions in FIRST_FILES, the
    second the rest of COMMIT.  Both keep COMMIT's commit id and the
    order of their file revisions, and replace COMMIT at its position
    in the stream.  Any branch cut from COMMIT is considered cut from
    the second part, and merges resolved to COMMIT are considered
    resolved to the second part."""

    if self._commits.get(commit.id) is not commit:
      raise InternalError('Commit %s is not part of any stream' % (commit,))

    first_files = set(first_files)
    first = [f for f in commit if f in first_files]
    second = [f for f in commit if f not in first_files]
    if len(first) != len(first_files):
      raise InternalError(
          'Split of commit %s names revisions from another commit' % (commit,)
          )
    if not first or not second:
      raise InternalError(
          'Split of commit %s would leave one part empty' % (commit,)
          )

    part1 = commit.create_split_commit(first)
    part2 = commit.create_split_commit(second)
    for part in (part1, part2):
      if part.merged_files:
        part.merge_from_id = commit.merge_from_id

    pred_id = self._predecessors[commit.id]
    index = commit.index
    self._unlink(commit)
    del self._commits[commit.id]
    del self._predecessors[commit.id]
    del self._successors[commit.id]

    self._register(part1)
    self._register(part2)
    self._link_after(part1, pred_id)
    self._link_after(part2, part1.id)
    self._renumber(part1, index)

    for part in (part1, part2):
      for f in part:
        f.file.add_commit(part, f.revision)

    for (branch, id) in list(self._branchpoints.items()):
      if id == commit.id:
        self._branchpoints[branch] = part2.id

    for c in self._commits.values():
      if c.merge_from_id == commit.id:
        c.merge_from_id = part2.id

    logger.verbose(
        'Split commit %s into [%s] and [%s]'
        % (commit,
           ', '.join([str(f) for f in part1]),
           ', '.join([str(f) for f in part2]),)
        )

    return (part1, part2)
