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

"""This program tests the MergeResolver class."""

import os
import sys
import unittest

SRCPATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, SRCPATH)

from cvsgit_lib.common import ImportFailedError
from cvsgit_lib.merge_resolver import MergeResolver
from cvsgit_lib.test.history_builder import HistoryBuilder
from cvsgit_lib.test.history_builder import get_stream
from cvsgit_lib.test.history_builder import quiet_logger


class MergeResolverTestCase(unittest.TestCase):
  def setUp(self):
    self.log = quiet_logger()
    b = self.builder = HistoryBuilder()
    b.branch('dev', '1.1.0.2', 'f1', 'f2')
    self.c0 = b.commit('c0', ('f1', '1.1'), ('f2', '1.1'))
    self.d1 = b.commit('d1', ('f1', '1.1.2.1'))
    self.d2 = b.commit('d2', ('f2', '1.1.2.1'))

  def build_streams(self):
    return self.builder.build_streams({'dev' : self.c0})

  def test_simple_merge(self):
    m1 = self.builder.commit('m1', ('f1', '1.2', '1.1.2.1'))
    m2 = self.builder.commit('m2', ('f2', '1.2', '1.1.2.1'))
    streams = self.build_streams()
    resolver = MergeResolver(streams)
    resolver.resolve()

    self.assertTrue(streams.get_merge_from(m1) is self.d1)
    self.assertTrue(streams.get_merge_from(m2) is self.d2)
    self.assertTrue(streams.get_merge_from(self.c0) is None)
    self.assertEqual(resolver.merge_count, 2)
    self.assertEqual(resolver.crossed_count, 0)
    self.assertEqual(get_stream(streams, 'dev'), [self.d1, self.d2])

  def test_merge_source_is_latest_mergepoint(self):
    m1 = self.builder.commit(
        'm1', ('f1', '1.2', '1.1.2.1'), ('f2', '1.2', '1.1.2.1'),
        )
    streams = self.build_streams()
    MergeResolver(streams).resolve()

    self.assertTrue(streams.get_merge_from(m1) is self.d2)

  def test_crossed_merges(self):
    m1 = self.builder.commit('m1', ('f2', '1.2', '1.1.2.1'))
    m2 = self.builder.commit('m2', ('f1', '1.2', '1.1.2.1'))
    streams = self.build_streams()
    resolver = MergeResolver(streams)
    resolver.resolve()

    self.assertEqual(get_stream(streams, 'dev'), [self.d2, self.d1])
    self.assertEqual([self.d2.index, self.d1.index], [0, 1])
    self.assertTrue(streams.get_merge_from(m1) is self.d2)
    self.assertTrue(streams.get_merge_from(m2) is self.d1)
    self.assertEqual(resolver.crossed_count, 1)
    self.assertTrue('Merges from dev to MAIN are crossed' in self.log.getvalue())

    # The merge sources now appear in increasing order:
    sources = [
        streams.get_merge_from(c)
        for c in get_stream(streams, 'MAIN')
        if c.merge_from_id is not None
        ]
    self.assertEqual([c.index for c in sources], [0, 1])

  def test_crossed_merges_cannot_be_fixed(self):
    # d1 and d3 both change f1, so d1 cannot be moved past d3:
    d3 = self.builder.commit('d3', ('f1', '1.1.2.2'))
    self.builder.commit('m1', ('f2', '1.2', '1.1.2.1'))
    self.builder.commit('m2', ('f1', '1.2', '1.1.2.1'))
    self.builder.commit('m3', ('f1', '1.3', '1.1.2.2'))
    streams = self.build_streams()

    # Put d2 last, so that m2 crosses the merge of m1:
    streams.move_commit(self.d2, d3)
    self.assertRaises(ImportFailedError, MergeResolver(streams).resolve)

  def add_release_branch(self):
    self.builder.branch('rel', '1.1.0.4', 'f1', 'f2')
    return self.builder.build_streams({'dev' : self.c0, 'rel' : self.c0})

  def test_two_destinations(self):
    m1 = self.builder.commit('m1', ('f1', '1.2', '1.1.2.1'))
    m2 = self.builder.commit('m2', ('f2', '1.2', '1.1.2.1'))
    r1 = self.builder.commit('r1', ('f1', '1.1.4.1', '1.1.2.1'))
    r2 = self.builder.commit('r2', ('f2', '1.1.4.1', '1.1.2.1'))
    streams = self.add_release_branch()
    resolver = MergeResolver(streams)
    resolver.resolve()

    self.assertTrue(streams.get_merge_from(m1) is self.d1)
    self.assertTrue(streams.get_merge_from(m2) is self.d2)
    self.assertTrue(streams.get_merge_from(r1) is self.d1)
    self.assertTrue(streams.get_merge_from(r2) is self.d2)
    self.assertEqual(resolver.merge_count, 4)
    self.assertEqual(resolver.crossed_count, 0)

  def test_destinations_need_opposite_orders(self):
    # MAIN merges d1 then d2, but rel merges d2 then d1.  Moving d1
    # after d2 for rel would cross the merges into MAIN:
    self.builder.commit('m1', ('f1', '1.2', '1.1.2.1'))
    self.builder.commit('m2', ('f2', '1.2', '1.1.2.1'))
    self.builder.commit('r1', ('f2', '1.1.4.1', '1.1.2.1'))
    self.builder.commit('r2', ('f1', '1.1.4.1', '1.1.2.1'))
    streams = self.add_release_branch()

    self.assertRaises(ImportFailedError, MergeResolver(streams).resolve)
    self.assertTrue(
        'Merges from dev to MAIN are out of order after resolution'
        in self.log.getvalue()
        )

  def test_merge_order_holds_for_every_destination(self):
    self.builder.commit('m1', ('f2', '1.2', '1.1.2.1'))
    self.builder.commit('m2', ('f1', '1.2', '1.1.2.1'))
    self.builder.commit('r1', ('f2', '1.1.4.1', '1.1.2.1'))
    self.builder.commit('r2', ('f1', '1.1.4.1', '1.1.2.1'))
    streams = self.add_release_branch()
    resolver = MergeResolver(streams)
    resolver.resolve()

    self.assertEqual(get_stream(streams, 'dev'), [self.d2, self.d1])
    self.assertEqual(resolver.crossed_count, 1)
    for branch in ['MAIN', 'rel']:
      sources = [
          streams.get_merge_from(c)
          for c in get_stream(streams, branch)
          if c.merge_from_id is not None
          ]
      self.assertEqual([c.index for c in sources], [0, 1])

  def test_missing_mergepoint(self):
    self.builder.commit('m1', ('f1', '1.2', '1.1.2.5'))
    streams = self.build_streams()
    self.assertRaises(ImportFailedError, MergeResolver(streams).resolve)
    self.assertTrue('which is in no commit' in self.log.getvalue())

  def test_unconverted_branch(self):
    # The commits on dev are not part of the streams:
    b = HistoryBuilder()
    b.branch('dev', '1.1.0.2', 'f1')
    c0 = b.commit('c0', ('f1', '1.1'))
    d1 = b.commit('d1', ('f1', '1.1.2.1'))
    m1 = b.commit('m1', ('f1', '1.2', '1.1.2.1'))
    b.get_file('f1').add_commit(d1, d1[0].revision)
    b.commits.remove(d1)
    streams = b.build_streams()
    resolver = MergeResolver(streams)
    resolver.resolve()

    self.assertTrue(streams.get_merge_from(m1) is None)
    self.assertEqual(resolver.merge_count, 0)
    self.assertEqual(get_stream(streams, 'MAIN'), [c0, m1])


if __name__ == '__main__':
  unittest.main()

