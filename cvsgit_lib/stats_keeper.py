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

"""This module contains the StatsKeeper class."""


from io import StringIO

from cvsgit_lib import config


class StatsKeeper:
  def __init__(self):
    self._pass_timings = { }

    self._commit_count = 0
    self._file_count = 0
    self._branch_count = 0
    self._split_branch_commit_count = 0
    self._excluded_commit_count = 0

    self._resolved_tag_count = 0
    self._failed_tag_count = 0
    self._split_commit_count = 0
    self._moved_commit_count = 0

    self._merge_count = 0
    self._crossed_merge_count = 0

  def log_duration_for_pass(self, duration, pass_num, pass_name):
    self._pass_timings[pass_num] = (pass_name, duration,)

  def record_commits(self, commit_count, split_count):
    """Record the number of commits read and how many were added by
    splitting commits that touched several branches."""

    self._commit_count = commit_count
    self._split_branch_commit_count = split_count

  def record_files(self, file_count):
    self._file_count = file_count

  def record_excluded_commits(self, count):
    self._excluded_commit_count = count

  def record_branches(self, branch_count):
    self._branch_count = branch_count

  def record_tag_resolver(self, tag_resolver):
    self._resolved_tag_count = len(tag_resolver.resolved_tags)
    self._failed_tag_count = len(tag_resolver.failed_tags)
    self._split_commit_count = tag_resolver.split_count
    self._moved_commit_count = tag_resolver.move_count

  def record_merge_resolver(self, merge_resolver):
    self._merge_count = merge_resolver.merge_count
    self._crossed_merge_count = merge_resolver.crossed_count

  def __str__(self):
    f = StringIO()
    f.write('\n')
    f.write('%s\n' % (config.STATISTICS_TITLE,))
    f.write('%s\n' % ('-' * len(config.STATISTICS_TITLE),))
    f.write('Total Files:            %10i\n' % (self._file_count,))
    f.write('Total Commits:          %10i\n' % (self._commit_count,))
    f.write(
        'Multi-Branch Splits:    %10i\n' % (self._split_branch_commit_count,)
        )
    f.write('Excluded Commits:       %10i\n' % (self._excluded_commit_count,))
    f.write('Total Branches:         %10i\n' % (self._branch_count,))
    f.write('Tags Resolved:          %10i\n' % (self._resolved_tag_count,))
    f.write('Tags Failed:            %10i\n' % (self._failed_tag_count,))
    f.write('Commits Split:          %10i\n' % (self._split_commit_count,))
    f.write('Commits Moved:          %10i\n' % (self._moved_commit_count,))
    f.write('Merges Resolved:        %10i\n' % (self._merge_count,))
    f.write('Crossed Merges:         %10i\n' % (self._crossed_merge_count,))
    f.write('%s' % ('-' * len(config.STATISTICS_TITLE),))
    return f.getvalue()

  @staticmethod
  def _get_timing_format(value):
    # Output times with up to 3 decimal places:
    decimals = max(0, 4 - len('%d' % int(value)))
    length = len(('%%.%df' % decimals) % value)
    return '%%%d.%df' % (length, decimals,)

  def single_pass_timing(self, pass_num):
    (pass_name, duration,) = self._pass_timings[pass_num]
    format = self._get_timing_format(duration)
    time_string = format % (duration,)
    return (
        'Time for pass%d (%s): %s seconds.'
        % (pass_num, pass_name, time_string,)
        )

  def timings(self):
    passes = sorted(self._pass_timings.keys())
    f = StringIO()
    f.write('Timings (seconds):\n')
    f.write('------------------\n')

    total = 0.0
    for pass_num in passes:
      (pass_name, duration,) = self._pass_timings[pass_num]
      total += duration

    format = self._get_timing_format(total)

    for pass_num in passes:
      (pass_name, duration,) = self._pass_timings[pass_num]
      f.write(
          (format + '   pass%-2d   %s\n') % (duration, pass_num, pass_name,)
          )

    f.write((format + '   total') % total)
    return f.getvalue()


