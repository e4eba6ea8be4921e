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

"""This module contains tools to manage the passes of a conversion."""


import time

from cvsgit_lib.context import Ctx
from cvsgit_lib.log import logger
from cvsgit_lib.stats_keeper import StatsKeeper


class Pass(object):
  """Base class for one step of the conversion."""

  def __init__(self):
    # By default, use the pass object's class name as the pass name:
    self.name = self.__class__.__name__

  def run(self, history, stats_keeper):
    """Carry out this step of the conversion.

    HISTORY is the ImportHistory being worked on.  STATS_KEEPER is an
    instance of StatsKeeper."""

    raise NotImplementedError()


class PassManager:
  """Manage a list of passes that are executed one after the other.

  Passes are numbered starting with 1."""

  def __init__(self, passes):
    """Construct a PassManager with the specified PASSES.

    Internally, passes are numbered starting with 1.  So PASSES[0] is
    considered to be pass number 1."""

    self.passes = passes
    self.num_passes = len(self.passes)

  def run(self, history):
    """Run all passes on HISTORY, one after another.

    Return the StatsKeeper holding the statistics of the run."""

    stats_keeper = StatsKeeper()

    start_time = time.time()
    for (i, the_pass) in enumerate(self.passes):
      logger.quiet('----- pass %d (%s) -----' % (i + 1, the_pass.name,))
      the_pass.run(history, stats_keeper)
      end_time = time.time()
      stats_keeper.log_duration_for_pass(
          end_time - start_time, i + 1, the_pass.name
          )
      logger.normal(stats_keeper.single_pass_timing(i + 1))
      start_time = end_time
      Ctx().clean()

    logger.quiet(stats_keeper)
    logger.normal(stats_keeper.timings())

    return stats_keeper


