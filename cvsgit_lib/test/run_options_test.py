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

"""This program tests the RunOptions class and the main() entry point."""

import io
import os
import sys
import unittest

SRCPATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, SRCPATH)

from cvsgit_lib.common import FatalError
from cvsgit_lib.context import Ctx
from cvsgit_lib.log import logger
from cvsgit_lib.run_options import RunOptions
from cvsgit_lib.main import main
from cvsgit_lib.test.history_builder import HistoryBuilder
from cvsgit_lib.test.history_builder import quiet_logger


class RunOptionsTestCase(unittest.TestCase):
  def setUp(self):
    quiet_logger()

  def test_defaults(self):
    RunOptions('cvsgit', [])
    ctx = Ctx()
    self.assertTrue(ctx.tag_matcher.match('anything'))
    self.assertTrue(ctx.branch_matcher.match('anything'))
    self.assertEqual(ctx.get_tagger(), 'nobody <nobody@localhost>')
    self.assertTrue(ctx.resolve_merges)

  def test_tag_rules_keep_order(self):
    RunOptions('cvsgit', [
        '--include-tag', '^REL',
        '--exclude-tag', 'BETA',
        '--include-tag', '^REL_2_BETA$',
        ])
    matcher = Ctx().tag_matcher
    self.assertTrue(matcher.match('REL_1'))
    self.assertFalse(matcher.match('REL_1_BETA'))
    self.assertTrue(matcher.match('REL_2_BETA'))
    self.assertFalse(matcher.match('TMP'))
    self.assertTrue(Ctx().branch_matcher.match('TMP'))

  def test_branch_rules(self):
    RunOptions('cvsgit', ['--exclude-branch', '^old_'])
    matcher = Ctx().branch_matcher
    self.assertFalse(matcher.match('old_dev'))
    self.assertTrue(matcher.match('dev'))

  def test_conversion_options(self):
    RunOptions('cvsgit', [
        '--tagger-name', 'Jo Bloggs',
        '--tagger-email', 'jo@example.com',
        '--no-merges',
        ])
    self.assertEqual(Ctx().get_tagger(), 'Jo Bloggs <jo@example.com>')
    self.assertFalse(Ctx().resolve_merges)

  def test_verbosity(self):
    RunOptions('cvsgit', ['-v', '-v'])
    self.assertEqual(logger.log_level, logger.DEBUG)
    RunOptions('cvsgit', ['-q', '-q', '-q', '-q', '-q', '-q'])
    self.assertEqual(logger.log_level, logger.ERROR)

  def test_invalid_regexp(self):
    self.assertRaises(
        FatalError, RunOptions, 'cvsgit', ['--include-tag', '(REL'],
        )

  def test_extra_arguments(self):
    self.assertRaises(FatalError, RunOptions, 'cvsgit', ['repos'])

  def test_invalid_tagger(self):
    self.assertRaises(
        FatalError, RunOptions, 'cvsgit', ['--tagger-name', ' '],
        )
    self.assertRaises(
        FatalError, RunOptions, 'cvsgit', ['--tagger-email', '<jo>'],
        )


class MainTestCase(unittest.TestCase):
  def setUp(self):
    quiet_logger()
    self.stderr = sys.stderr
    sys.stderr = io.StringIO()

  def tearDown(self):
    sys.stderr = self.stderr

  def test_main(self):
    b = HistoryBuilder()
    b.tag('REL', ('a', '1.1'))
    c0 = b.commit('c0', ('a', '1.1'))
    b.commit('c1', ('a', '1.2'))
    history = main('cvsgit', ['--no-merges'], b.commits, b.files, {})

    self.assertTrue(history.resolved_tags['REL'] is c0)
    self.assertEqual(sys.stderr.getvalue(), '')

  def test_main_fatal_error(self):
    b = HistoryBuilder()
    b.commit('c0', ('a', '1.1'))
    b.commit('c1', ('a', '1.3'))
    try:
      main('cvsgit', [], b.commits, b.files, {})
    except SystemExit as e:
      self.assertEqual(e.code, 1)
    else:
      self.fail('SystemExit not raised')

    self.assertTrue(sys.stderr.getvalue().startswith('ERROR: '))
    self.assertTrue('did not directly follow r1.1' in sys.stderr.getvalue())

  def test_main_bad_option(self):
    try:
      main('cvsgit', ['--include-branch', '['], [], {}, {})
    except SystemExit as e:
      self.assertEqual(e.code, 1)
    else:
      self.fail('SystemExit not raised')

    self.assertTrue('is not a valid regexp' in sys.stderr.getvalue())


if __name__ == '__main__':
  unittest.main()

