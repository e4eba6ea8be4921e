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

"""This module contains the TagResolver class.

CVS tags are attached to each file separately, so nothing guarantees
that the tagged revisions of all files were ever present together at
one point of the commit history.  TagResolver finds, for each tag, the
point in each branch stream where all tagged files have reached their
tagged revision, and repairs the stream where some commit before that
point already carries a tagged file past its tagged revision.

For one tag and one branch, the commit that produced the tagged
revision of a file is that file's anchor, and the anchor with the
highest index is the final anchor.  Every file revision on a tagged
file that lies between the start of the stream and the final anchor
must not be later than the file's tagged revision.  Revisions that are
later are dealt with as follows:

- A commit that consists only of such revisions is moved to just after
  the final anchor (keeping the relative order of all moved commits).

- A commit that contains such revisions besides others is split in
  two; the second part holds the later revisions and is moved like a
  whole commit (unless the commit is the final anchor itself, in which
  case the split is enough).

A repair that would move a commit past the branchpoint of another
branch, or past another revision of one of its files, is refused and
the tag is reported as unresolvable.  So is a repair that would move a
commit holding the tagged revision of an already resolved tag past that
tag's final anchor.  After each repair the tags resolved so far are
checked again, and any that became inconsistent are reported as
unresolvable too."""


from cvsgit_lib import config
from cvsgit_lib.common import warning_prefix
from cvsgit_lib.log import logger
from cvsgit_lib.inclusion_matcher import InclusionMatcher


class _TagFailure(Exception):
  """A tag cannot be brought into a consistent state."""

  pass


class _BranchTagPlan(object):
  """The state of one tag on one branch stream.

  Members:

    branch -- (string) the branch name.

    tagged -- (dict) {filename : Revision} of the tagged revisions of
        the files whose tagged revision lies on BRANCH.

    final -- (Commit) the final anchor.

    segment -- (list of Commit) the stream from its first commit up to
        and including FINAL.

    repairs -- (list of (Commit, list of FileRevision)) the commits in
        SEGMENT that carry tagged files past their tagged revision,
        with those file revisions.

  """

  def __init__(self, branch, tagged, final, segment, repairs):
    self.branch = branch
    self.tagged = tagged
    self.final = final
    self.segment = segment
    self.repairs = repairs

  def needs_fix(self):
    return bool(self.repairs)


class TagResolver(object):
  """Make every tag correspond to one point in the branch streams."""

  def __init__(self, streams, all_files, tag_matcher=None):
    """Initialize a TagResolver.

    STREAMS is the BranchStreamCollection to check and repair.
    ALL_FILES is a map {filename : FileInfo}.  TAG_MATCHER is an
    InclusionMatcher selecting the tags to process; by default all
    tags are processed."""

    self._streams = streams
    self._all_files = all_files
    if tag_matcher is None:
      tag_matcher = InclusionMatcher()
    self._tag_matcher = tag_matcher

    # A map {tag name : Commit} of the tags that are consistent:
    self.resolved_tags = {}

    # The names of the tags that could not be resolved:
    self.failed_tags = []

    self.split_count = 0
    self.move_count = 0

  def _get_commits(self):
    return list(self._streams)

  commits = property(_get_commits)

  def get_tags(self):
    """Return the sorted names of all tags that should be processed."""

    tags = set()
    for file in self._all_files.values():
      tags.update(file.tags.keys())

    retval = []
    for tag in sorted(tags):
      if self._tag_matcher.match(tag):
        retval.append(tag)
      else:
        logger.verbose('Excluding tag %s' % (tag,))

    return retval

  def resolve(self):
    """Check whether all tags are consistent, without changing anything.

    Return True iff every tag is consistent."""

    logger.double_rule_off()
    logger.normal('Checking tags...')

    consistent = True
    with logger.indent():
      for tag in self.get_tags():
        try:
          plans = self._plan_tag(tag)
        except _TagFailure as e:
          logger.normal('Tag %s cannot be resolved: %s' % (tag, e,))
          consistent = False
          continue

        if self._needs_fix(plans):
          logger.normal('Tag %s is inconsistent' % (tag,))
          consistent = False
        else:
          self.resolved_tags[tag] = self._get_tag_commit(plans)

    return consistent

  def resolve_and_fix(self):
    """Check all tags and repair the streams where necessary.

    Return True iff every tag is consistent afterwards.  Tags that
    cannot be repaired are logged, left out of SELF.resolved_tags and
    listed in SELF.failed_tags."""

    logger.double_rule_off()
    logger.normal('Resolving tags...')

    with logger.indent():
      for tag in self.get_tags():
        if not self._resolve_tag(tag):
          self.failed_tags.append(tag)

    if self.failed_tags:
      logger.blank()
      logger.warn(
          '%s: %d tag(s) could not be resolved and will not be converted:\n'
          '    %s'
          % (warning_prefix, len(self.failed_tags),
             '\n    '.join(self.failed_tags),)
          )
      return False

    return True

  def _resolve_tag(self, tag):
    """Resolve TAG, repairing the streams if needed.

    Return True on success."""

    try:
      plans = self._plan_tag(tag)
      if self._needs_fix(plans):
        logger.normal('Fixing tag %s' % (tag,))
        with logger.indent():
          # Check every branch before changing any of them:
          anchors = self._get_resolved_anchors()
          for plan in plans:
            self._check_plan(plan, anchors)
          for plan in plans:
            self._apply_plan(plan)
          self._recheck_resolved_tags()

        plans = self._plan_tag(tag)
        if self._needs_fix(plans):
          raise _TagFailure('the tag is still inconsistent after repair')
    except _TagFailure as e:
      logger.warn(
          '%s: Unable to resolve tag %s: %s' % (warning_prefix, tag, e,)
          )
      return False

    commit = self._get_tag_commit(plans)
    self.resolved_tags[tag] = commit
    logger.verbose('Tag %s resolved to commit %s' % (tag, commit,))
    return True

  def _needs_fix(self, plans):
    for plan in plans:
      if plan.needs_fix():
        return True
    return False

  def _get_tag_commit(self, plans):
    """Return the commit that the tag described by PLANS points at.

    That is the final anchor on the branch holding the most tagged
    files (MAIN wins a tie, then the first branch by name)."""

    def key(plan):
      return (
          -len(plan.tagged),
          plan.branch != config.MAIN_BRANCH,
          plan.branch,
          )

    return min(plans, key=key).final

  def _plan_tag(self, tag):
    """Return a list of _BranchTagPlans for TAG, one per branch.

    Raise _TagFailure if a tagged revision cannot be found in any
    commit."""

    # A map {branch : {filename : Revision}}:
    groups = {}
    for filename in sorted(self._all_files.keys()):
      file = self._all_files[filename]
      revision = file.tags.get(tag)
      if revision is None:
        continue
      branch = file.get_branch(revision)
      groups.setdefault(branch, {})[filename] = revision

    plans = []
    for branch in sorted(groups.keys()):
      tagged = groups[branch]
      if branch not in self._streams:
        raise _TagFailure(
            'files are tagged on branch %s, which has no commits' % (branch,)
            )

      final = None
      for filename in sorted(tagged.keys()):
        revision = tagged[filename]
        anchor = self._all_files[filename].get_commit(revision)
        if anchor is None:
          raise _TagFailure(
              'no commit contains %s r%s' % (filename, revision,)
              )
        if final is None or anchor.index > final.index:
          final = anchor

      segment = []
      repairs = []
      for commit in self._streams.iter_branch(branch):
        segment.append(commit)
        late = [
            f
            for f in commit
            if f.file.name in tagged and f.revision > tagged[f.file.name]
            ]
        if late:
          repairs.append((commit, late))
        if commit is final:
          break

      plans.append(_BranchTagPlan(branch, tagged, final, segment, repairs))

    return plans

  def _get_resolved_anchors(self):
    """Return the anchors of the tags resolved so far.

    The return value is a map {Commit : [(tag name, Commit)]} giving,
    for each anchor, the tags that refer to it together with their
    final anchor on the same branch."""

    anchors = {}
    for tag in sorted(self.resolved_tags.keys()):
      for plan in self._plan_tag(tag):
        for (filename, revision) in plan.tagged.items():
          anchor = self._all_files[filename].get_commit(revision)
          entries = anchors.setdefault(anchor, [])
          if (tag, plan.final) not in entries:
            entries.append((tag, plan.final))

    return anchors

  def _recheck_resolved_tags(self):
    """Plan the tags resolved so far again after the streams changed.

    A split can replace the commit that a tag points at, so the commit
    is looked up again.  A tag that is no longer consistent is moved
    from SELF.resolved_tags to SELF.failed_tags."""

    for tag in sorted(self.resolved_tags.keys()):
      try:
        plans = self._plan_tag(tag)
        if self._needs_fix(plans):
          raise _TagFailure('a later repair made it inconsistent')
      except _TagFailure as e:
        logger.warn(
            '%s: Unable to keep tag %s: %s' % (warning_prefix, tag, e,)
            )
        del self.resolved_tags[tag]
        self.failed_tags.append(tag)
        continue

      self.resolved_tags[tag] = self._get_tag_commit(plans)

  def _check_plan(self, plan, anchors):
    """Raise _TagFailure if the repairs for PLAN cannot be carried out.

    ANCHORS is a map as returned by _get_resolved_anchors().  A commit
    holding the tagged revision of an already resolved tag may not be
    moved to after that tag's final anchor.

    This simulates _apply_plan() without changing the streams.  Moved
    commits are processed from the last to the first, so each of them
    only passes over commits (or parts of commits) that stay where
    they are."""

    # A map {Commit : set of filenames} of what each commit in the
    # segment leaves in place:
    staying = {}
    for commit in plan.segment:
      staying[commit] = commit.get_filenames()

    moving = []
    for (commit, late) in plan.repairs:
      late_names = set([f.file.name for f in late])
      staying[commit] = staying[commit] - late_names
      if commit is not plan.final:
        moving.append((commit, late_names))
      elif not staying[commit]:
        raise _TagFailure(
            'the final commit %s holds no tagged revision' % (commit,)
            )

    for (commit, late_names) in moving:
      if self._streams.get_branches_cut_from(commit):
        raise _TagFailure(
            'commit %s would have to move, but branch %s is cut from it'
            % (commit, self._streams.get_branches_cut_from(commit)[0],)
            )

      position = plan.segment.index(commit)
      passed = plan.segment[position + 1:]
      for (tag, final) in anchors.get(commit, []):
        if final is commit or final in passed:
          raise _TagFailure(
              'commit %s would have to move, but tag %s refers to it'
              % (commit, tag,)
              )

      for c in passed:
        if not staying[c]:
          continue
        if staying[c] == c.get_filenames():
          cut_branches = self._streams.get_branches_cut_from(c)
          if cut_branches:
            raise _TagFailure(
                'commit %s would have to move past the branchpoint of '
                'branch %s'
                % (commit, cut_branches[0],)
                )
        common = late_names & staying[c]
        if common:
          raise _TagFailure(
              'commit %s would have to move past commit %s, which also '
              'changes %s'
              % (commit, c, ', '.join(sorted(common)),)
              )

  def _apply_plan(self, plan):
    """Carry out the repairs described by PLAN."""

    final = plan.final
    to_move = []

    for (commit, late) in plan.repairs:
      if len(late) == len(commit):
        to_move.append(commit)
        continue

      late = set(late)
      first_files = [f for f in commit if f not in late]
      (part1, part2) = self._streams.split_commit(commit, first_files)
      self.split_count += 1
      logger.normal(
          'Split commit %s on branch %s' % (commit, plan.branch,)
          )
      if commit is final:
        final = part1
      else:
        to_move.append(part2)

    for commit in reversed(to_move):
      logger.normal('Moving commit %s after commit %s' % (commit, final,))
      self._streams.move_commit(commit, final)
      self.move_count += 1
