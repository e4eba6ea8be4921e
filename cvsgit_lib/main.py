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

"""Entry points for reconciling a CVS history."""


import sys

from cvsgit_lib.common import FatalException
from cvsgit_lib.run_options import RunOptions
from cvsgit_lib.pass_manager import PassManager
from cvsgit_lib.passes import ImportHistory
from cvsgit_lib.passes import passes


def resolve_history(commits, all_files, branchpoints):
  """Reconcile a CVS history using the options stored in Ctx().

  COMMITS is the ordered sequence of Commits read from CVS, ALL_FILES
  a map {filename : FileInfo} and BRANCHPOINTS a map {branch name :
  Commit} of the commit each branch was cut from.  Return the
  ImportHistory holding the branch streams and the resolved tags.

  Raise a FatalException if the history cannot be reconciled."""

  history = ImportHistory(commits, all_files, branchpoints)
  history.stats_keeper = PassManager(passes).run(history)
  return history


def main(progname, cmd_args, commits, all_files, branchpoints):
  """Process CMD_ARGS, then reconcile the history and return it.

  On a fatal error, write the error to stderr and exit with status 1."""

  try:
    RunOptions(progname, cmd_args)
    return resolve_history(commits, all_files, branchpoints)
  except FatalException as e:
    sys.stderr.write(str(e) + '\n')
    sys.exit(1)


