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

"""This module defines the passes that make up a conversion."""


from cvsgit_lib import config
from cvsgit_lib.context import Ctx
from cvsgit_lib.common import warning_prefix
from cvsgit_lib.common import FatalError
from cvsgit_lib.log import logger
from cvsgit_lib.pass_manager import Pass
from cvsgit_lib.commit_list import split_multi_branch_commits
from cvsgit_lib.commit_list import add_commits_to_files
from cvsgit_lib.branch_streams import BranchStreamCollection
from cvsgit_lib.tag_resolver import TagResolver
from cvsgit_lib.merge_resolver import MergeResolver
from cvsgit_lib.repository_state import RepositoryState


class ImportHistory(object):
  """The history being reconciled, shared by all passes.

  Members:

    commits -- (list of Commit) the commits in their original order.

    all_files -- (dict) {filename : FileInfo} of every file in the
        repository.

    branchpoints -- (dict) {branch name : Commit} of the commit on the
        parent branch that each branch was cut from.

    streams -- (BranchStreamCollection) the per-branch streams, once
        BuildBranchStreamsPass has run.

    resolved_tags -- (dict) {tag name : Commit} of the tags that could
        be placed on a single commit.

    failed_tags -- (list of string) the names of the tags that could
        not.

    tagger -- (string) the identity, in the form 'Name <email>', to
        use as the creator of the tags.

    stats_keeper -- (StatsKeeper) the statistics of the run, once all
        passes have run.

  """

  def __init__(self, commits, all_files, branchpoints):
    self.commits = list(commits)
    self.all_files = all_files
    self.branchpoints = dict(branchpoints)
    self.streams = None
    self.resolved_tags = {}
    self.failed_tags = []
    self.tagger = None
    self.stats_keeper = None


class SplitCommitsPass(Pass):
  """Split commits that touch several branches and index file revisions."""

  def _find_branchpoint(self, branch, commit, commit_set):
    """Return the part of the split COMMIT that BRANCH was cut from.

    Return None if no part contains the branchpoint revision of any
    file."""

    for f in commit:
      if f.file.get_branchpoint(branch) == f.revision:
        candidate = f.file.get_commit(f.revision)
        if candidate in commit_set:
          return candidate

    return None

  def run(self, history, stats_keeper):
    logger.quiet('Splitting commits that touch multiple branches...')

    original_count = len(history.commits)
    commits = add_commits_to_files(
        split_multi_branch_commits(history.commits)
        )

    problems = []
    for commit in commits:
      problems.extend(commit.verify())
    if problems:
      raise FatalError(
          'Invalid commits:\n  %s' % ('\n  '.join(problems),)
          )

    commit_set = set(commits)
    branchpoints = {}
    for (branch, commit) in history.branchpoints.items():
      if commit not in commit_set:
        commit = self._find_branchpoint(branch, commit, commit_set)
        if commit is None:
          logger.warn(
              '%s: the branchpoint of branch %s is unknown'
              % (warning_prefix, branch,)
              )
          continue
      branchpoints[branch] = commit

    history.commits = commits
    history.branchpoints = branchpoints

    stats_keeper.record_commits(len(commits), len(commits) - original_count)
    stats_keeper.record_files(len(history.all_files))
    logger.quiet('Done')


class FilterBranchesPass(Pass):
  """Drop the commits on branches that are not to be converted."""

  def _is_included(self, branch):
    return branch == config.MAIN_BRANCH or Ctx().branch_matcher.match(branch)

  def run(self, history, stats_keeper):
    logger.quiet('Filtering branches...')

    commits = []
    excluded = set()
    for commit in history.commits:
      if self._is_included(commit.branch):
        commits.append(commit)
      else:
        excluded.add(commit.branch)

    for branch in sorted(excluded):
      logger.normal('Excluding branch %s' % (branch,))

    branchpoints = {}
    for (branch, commit) in history.branchpoints.items():
      if not self._is_included(branch):
        continue
      if commit.branch in excluded:
        logger.warn(
            '%s: branch %s is cut from excluded branch %s'
            % (warning_prefix, branch, commit.branch,)
            )
        continue
      branchpoints[branch] = commit

    stats_keeper.record_excluded_commits(len(history.commits) - len(commits))
    history.commits = commits
    history.branchpoints = branchpoints
    logger.quiet('Done')


class BuildBranchStreamsPass(Pass):
  """Arrange the commits into one stream per branch."""

  def run(self, history, stats_keeper):
    logger.quiet('Building branch streams...')

    history.streams = BranchStreamCollection(
        history.commits, history.branchpoints
        )

    for branch in history.streams.branches:
      count = len(list(history.streams.iter_branch(branch)))
      logger.verbose('Branch %s: %d commit(s)' % (branch, count,))

    stats_keeper.record_branches(len(history.streams.branches))
    logger.quiet('Done')


class ResolveTagsPass(Pass):
  """Make every tag refer to a single commit."""

  def run(self, history, stats_keeper):
    resolver = TagResolver(
        history.streams, history.all_files, Ctx().tag_matcher
        )
    resolver.resolve_and_fix()

    history.resolved_tags = resolver.resolved_tags
    history.failed_tags = resolver.failed_tags
    history.tagger = Ctx().get_tagger()

    stats_keeper.record_tag_resolver(resolver)


class ResolveMergesPass(Pass):
  """Attach each merge commit to the commit it merged from."""

  def run(self, history, stats_keeper):
    if not Ctx().resolve_merges:
      logger.normal('Merge resolution is disabled')
      return

    resolver = MergeResolver(history.streams)
    resolver.resolve()

    stats_keeper.record_merge_resolver(resolver)


class VerifyBranchesPass(Pass):
  """Replay every branch stream to check that it is a valid history."""

  def run(self, history, stats_keeper):
    logger.quiet('Verifying branches...')

    state = RepositoryState()
    for commit in history.streams:
      state.apply(commit)

    for branch in history.streams.branches:
      logger.verbose(
          'Branch %s: %d live file(s)'
          % (branch, len(state[branch].live_files),)
          )

    logger.quiet('Done')


passes = [
    SplitCommitsPass(),
    FilterBranchesPass(),
    BuildBranchStreamsPass(),
    ResolveTagsPass(),
    VerifyBranchesPass(),
    ResolveMergesPass(),
    VerifyBranchesPass(),
    ]


