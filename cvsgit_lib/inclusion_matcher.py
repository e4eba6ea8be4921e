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

"""This module contains the InclusionMatcher class."""


import re

from cvsgit_lib.common import FatalError


class _InclusionRule:
  """A single rule that includes or excludes names matching a regexp."""

  def __init__(self, pattern, include):
    """Initialize an _InclusionRule.

    PATTERN is a string that will be treated as a regexp pattern.  It
    is searched for anywhere in a name (it is not anchored).  INCLUDE
    is True for include rules and False for exclude rules."""

    try:
      self.regexp = re.compile(pattern)
    except re.error:
      raise FatalError("%r is not a valid regexp." % (pattern,))

    self.include = include

  def matches(self, name):
    return self.regexp.search(name) is not None

  def __str__(self):
    if self.include:
      return 'include %r' % (self.regexp.pattern,)
    else:
      return 'exclude %r' % (self.regexp.pattern,)


class InclusionMatcher:
  """Decide whether tags or branches are included in the conversion.

  The rules are kept in the order in which they were added, and the
  last rule that matches a name decides.  If no rule matches, the
  default applies: names are included unless the first rule that was
  added is an include rule, in which case only names matched by an
  include rule are included."""

  def __init__(self, rules=()):
    """Initialize the matcher.

    RULES is an iterable of (pattern, include) tuples that are added
    in order."""

    self._rules = []
    self.default = True

    for (pattern, include) in rules:
      self.add_rule(pattern, include)

  def add_rule(self, pattern, include):
    if not self._rules:
      self.default = not include
    self._rules.append(_InclusionRule(pattern, include))

  def add_include_rule(self, pattern):
    self.add_rule(pattern, True)

  def add_exclude_rule(self, pattern):
    self.add_rule(pattern, False)

  def match(self, name):
    """Return True iff NAME is included."""

    for rule in reversed(self._rules):
      if rule.matches(name):
        return rule.include

    return self.default

  def __str__(self):
    if not self._rules:
      return 'InclusionMatcher(<include all>)'
    return 'InclusionMatcher(%s)' % (
        ', '.join([str(rule) for rule in self._rules]),)
