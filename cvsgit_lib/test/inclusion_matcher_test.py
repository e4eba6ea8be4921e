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

"""This program tests the InclusionMatcher class."""

import os
import sys
import unittest

SRCPATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, SRCPATH)

from cvsgit_lib.common import FatalError
from cvsgit_lib.inclusion_matcher import InclusionMatcher


class InclusionMatcherTestCase(unittest.TestCase):
  def test_no_rules(self):
    matcher = InclusionMatcher()
    self.assertTrue(matcher.match('RELEASE_1'))
    self.assertTrue(matcher.match(''))

  def test_default_matchers_are_independent(self):
    matcher = InclusionMatcher()
    matcher.add_exclude_rule('^TMP_')
    self.assertFalse(matcher.match('TMP_1'))
    self.assertTrue(InclusionMatcher().match('TMP_1'))

  def test_exclude_first(self):
    matcher = InclusionMatcher()
    matcher.add_exclude_rule('^TMP_')
    self.assertFalse(matcher.match('TMP_1'))
    self.assertTrue(matcher.match('RELEASE_1'))

  def test_include_first(self):
    matcher = InclusionMatcher()
    matcher.add_include_rule('^RELEASE_')
    self.assertTrue(matcher.match('RELEASE_1'))
    self.assertFalse(matcher.match('TMP_1'))

  def test_last_match_wins(self):
    matcher = InclusionMatcher()
    matcher.add_include_rule('^RELEASE_')
    matcher.add_exclude_rule('_BETA$')
    matcher.add_include_rule('^RELEASE_2_BETA$')
    self.assertTrue(matcher.match('RELEASE_1'))
    self.assertFalse(matcher.match('RELEASE_1_BETA'))
    self.assertTrue(matcher.match('RELEASE_2_BETA'))
    self.assertFalse(matcher.match('dev'))

  def test_search_is_unanchored(self):
    matcher = InclusionMatcher([('BETA', False)])
    self.assertFalse(matcher.match('RELEASE_BETA_2'))
    self.assertTrue(matcher.match('RELEASE_2'))

  def test_invalid_pattern(self):
    matcher = InclusionMatcher()
    try:
      matcher.add_include_rule('(unclosed')
    except FatalError as e:
      self.assertTrue(str(e).startswith('ERROR: '))
    else:
      self.fail('FatalError not raised')

  def test_str(self):
    self.assertEqual(str(InclusionMatcher()), 'InclusionMatcher(<include all>)')
    matcher = InclusionMatcher([('a', True), ('b', False)])
    self.assertEqual(
        str(matcher), "InclusionMatcher(include 'a', exclude 'b')"
        )


if __name__ == '__main__':
  unittest.main()

