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

"""Resolve merges back to individual commits on other branches."""


from cvsgit_lib.common import ImportFailedError
from cvsgit_lib.common import RepositoryConsistencyError
from cvsgit_lib.log import logger


class _MergeFailure(Exception):
  """A merge cannot be attributed to a single source commit."""

  pass


class MergeResolver(object):
  """Assign each merge commit the commit on the source branch it merged.

  CVS records a mergepoint per file revision.  The source of a merge
  commit is the latest (highest index) of the commits containing its
  mergepoints.  Merges from one branch into another must reach the
  source branch in increasing order; where CVS recorded them crossed,
  the out-of-order source commit is moved to just after the source of
  the previous merge.  Such a move can reorder sources that another
  destination branch already merged from, so the order is checked
  again for every destination once all merges are assigned.

  Members:

    merge_count -- (int) the number of merges resolved.

    crossed_count -- (int) the number of crossed merges repaired.

  """

  def __init__(self, streams):
    self._streams = streams
    self.merge_count = 0
    self.crossed_count = 0

  def resolve(self):
    """Resolve all merges.

    Raise ImportFailedError if any merge could not be resolved."""

    logger.double_rule_off()
    logger.normal('Resolving merges...')

    with logger.indent():
      self._resolve_merges()

  def _resolve_merges(self):
    failures = 0
    for branch in self._streams.branches:
      failures += self._process_branch(branch)

    # A relocation made for one destination branch can reorder sources
    # that another destination already merged from:
    for branch in self._streams.branches:
      failures += self._check_merge_order(branch)

    if failures > 0:
      raise ImportFailedError(
          'Failed to resolve all merges (%d failure(s))' % (failures,)
          )

  def _find_source(self, commit_dest):
    """Return the commit that COMMIT_DEST merges from.

    Mergepoints in commits that are not part of any stream (because
    their branch is not converted) are ignored.  Return None if no
    mergepoint is left.  Raise _MergeFailure if a mergepoint has no
    commit or the mergepoints are on several branches."""

    sources = []
    for f in commit_dest.merged_files:
      source = f.file.get_commit(f.mergepoint)
      if source is None:
        raise _MergeFailure(
            'Commit %s merges %s from r%s, which is in no commit'
            % (commit_dest, f.file.name, f.mergepoint,)
            )
      if source.id is None:
        logger.verbose(
            'Ignoring merge of %s r%s into commit %s: branch %s is not '
            'converted'
            % (f.file.name, f.mergepoint, commit_dest, source.branch,)
            )
        continue
      sources.append(source)

    if not sources:
      return None

    branches = set([source.branch for source in sources])
    if len(branches) > 1:
      raise _MergeFailure(
          'Commit %s merges from several branches at once: %s'
          % (commit_dest, ', '.join(sorted(branches)),)
          )

    return max(sources, key=lambda source: source.index)

  def _process_branch(self, branch):
    """Process merges to a single branch.

    Return the number of failures."""

    failures = 0

    # A map {source branch name : Commit} of the last commit merged
    # from each source branch:
    last_merges = {}

    for commit_dest in list(self._streams.iter_branch(branch)):
      if not commit_dest.merged_files:
        continue

      try:
        commit_source = self._find_source(commit_dest)
      except _MergeFailure as e:
        logger.error(str(e))
        failures += 1
        continue

      if commit_source is None:
        continue

      last_merge_source = last_merges.get(commit_source.branch)
      if (
          last_merge_source is not None
          and commit_source.index < last_merge_source.index
          ):
        logger.normal(
            'Merges from %s to %s are crossed (%s->%s)'
            % (commit_source.branch, commit_dest.branch,
               commit_source, commit_dest,)
            )

        with logger.indent():
          try:
            self._streams.move_commit(commit_source, last_merge_source)
          except RepositoryConsistencyError as e:
            logger.error(str(e))
            failures += 1
            continue

        # The last merge is unchanged; the moved commit now directly
        # follows it.
        self.crossed_count += 1
      else:
        last_merges[commit_source.branch] = commit_source

      commit_dest.merge_from_id = commit_source.id
      self.merge_count += 1
      logger.verbose(
          'Commit %s on %s merges from commit %s on %s'
          % (commit_dest, commit_dest.branch,
             commit_source, commit_source.branch,)
          )

    return failures

  def _check_merge_order(self, branch):
    """Check that the merges into BRANCH reach each source in order.

    Log an error for each merge whose source precedes the source of an
    earlier merge from the same branch.  Return the number of such
    merges."""

    failures = 0
    last_merges = {}

    for commit_dest in self._streams.iter_branch(branch):
      commit_source = self._streams.get_merge_from(commit_dest)
      if commit_source is None:
        continue

      last_merge_source = last_merges.get(commit_source.branch)
      if (
          last_merge_source is not None
          and commit_source.index < last_merge_source.index
          ):
        logger.error(
            'Merges from %s to %s are out of order after resolution '
            '(%s->%s precedes %s)'
            % (commit_source.branch, branch,
               commit_source, commit_dest, last_merge_source,)
            )
        failures += 1
      else:
        last_merges[commit_source.branch] = commit_source

    return failures
