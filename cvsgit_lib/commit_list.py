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

"""Functions that operate on a whole sequence of commits."""


from cvsgit_lib.log import logger


def split_multi_branch_commits(commits):
  """Yield the commits in COMMITS, split so that each touches one branch.

  A CVS commit can touch files on several branches at once (for
  example when files were committed from a sandbox with mixed sticky
  tags).  Such a commit is split into one commit per branch, in the
  order in which the branches first appear in the commit.  Each part
  keeps the original commit id and the original order of its file
  revisions."""

  for commit in commits:
    branches = []
    file_revisions = {}
    for f in commit:
      branch = f.branch
      if branch not in file_revisions:
        branches.append(branch)
        file_revisions[branch] = []
      file_revisions[branch].append(f)

    if len(branches) <= 1:
      yield commit
    else:
      logger.verbose(
          'Splitting commit %s, which is on branches %s'
          % (commit.commit_id, ', '.join(branches),)
          )
      for branch in branches:
        yield commit.create_split_commit(file_revisions[branch])


def add_commits_to_files(commits):
  """Register each commit in COMMITS with the files it contains.

  Afterwards FileInfo.get_commit() finds the commit for each file
  revision.  Return COMMITS as a list."""

  commits = list(commits)

  for commit in commits:
    for f in commit:
      f.file.add_commit(commit, f.revision)

  return commits
