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

"""This module contains the Revision class.

A Revision is a CVS revision number such as '1.4' (a trunk revision),
'1.4.2.3' (the third revision on a branch cut from 1.4) or '1.4.0.2'
(the number that a branch tag is attached to).  The empty revision
stands for a file that does not exist yet."""


from cvsgit_lib import config


class Revision(object):
  """An immutable CVS revision number.

  Members:

    parts -- (tuple of int) the dotted components of the revision
        number.  Empty for Revision.Empty.

  """

  __slots__ = ['parts']

  def __init__(self, parts):
    parts = tuple(parts)
    for part in parts:
      if part < 0:
        raise ValueError('Negative component in revision %r' % (parts,))
    self.parts = parts

  @staticmethod
  def create(value):
    """Return the Revision described by the string VALUE.

    The empty string yields Revision.Empty.  Raise ValueError if VALUE
    is not a dotted sequence of non-negative integers."""

    if not value:
      return Revision.Empty

    try:
      parts = [int(part) for part in value.split('.')]
    except ValueError:
      raise ValueError('Invalid revision number %r' % (value,))

    return Revision(parts)

  def is_empty(self):
    return not self.parts

  def _get_is_branch(self):
    return (
        len(self.parts) > 2
        and len(self.parts) % 2 == 0
        and self.parts[-2] == config.BRANCH_MARKER
        )

  is_branch = property(
      _get_is_branch,
      doc="""True iff this is a branch tag number like '1.4.0.2'.""",
      )

  def is_trunk(self):
    return len(self.parts) == 2

  def _get_branch_stem(self):
    if self.is_branch or len(self.parts) >= 4:
      return Revision(self.parts[:-2])
    else:
      return Revision.Empty

  branch_stem = property(
      _get_branch_stem,
      doc="""The revision this revision's branch was cut from.

      Both '1.4.0.2' and '1.4.2.3' have the stem '1.4'.  Trunk
      revisions have no stem and return Revision.Empty.""",
      )

  def _get_branch_number(self):
    if self.is_branch:
      return Revision(self.parts[:-2] + self.parts[-1:])
    elif len(self.parts) >= 4:
      return Revision(self.parts[:-1])
    else:
      return Revision.Empty

  branch_number = property(
      _get_branch_number,
      doc="""The number that identifies this revision's branch line.

      Both '1.4.0.2' and '1.4.2.3' belong to branch '1.4.2'.  Unlike the
      stem, this is distinct for every branch cut from one revision.""",
      )

  def _is_first_of_line(self):
    """Return True iff SELF is the first revision on a line ('x.1')."""

    return (
        len(self.parts) >= 2
        and len(self.parts) % 2 == 0
        and self.parts[-1] == 1
        and not self.is_branch
        )

  def directly_precedes(self, other):
    """Return True iff OTHER can be the revision that follows SELF.

    That is the case if OTHER is SELF with the last component
    incremented, if OTHER starts a new major trunk number, if SELF is
    empty and OTHER is the first revision of a line, or if OTHER is the
    first revision of a branch cut from SELF."""

    if self.is_empty():
      return other._is_first_of_line()

    if len(other.parts) == len(self.parts):
      if (
          self.parts[:-1] == other.parts[:-1]
          and other.parts[-1] == self.parts[-1] + 1
          ):
        return True
      return (
          self.is_trunk()
          and other.parts[1] == 1
          and other.parts[0] > self.parts[0]
          )

    if len(other.parts) == len(self.parts) + 2:
      return (
          other.parts[:len(self.parts)] == self.parts
          and other._is_first_of_line()
          )

    return False

  def __eq__(self, other):
    if not isinstance(other, Revision):
      return NotImplemented
    return self.parts == other.parts

  def __ne__(self, other):
    if not isinstance(other, Revision):
      return NotImplemented
    return self.parts != other.parts

  def __lt__(self, other):
    return self.parts < other.parts

  def __le__(self, other):
    return self.parts <= other.parts

  def __gt__(self, other):
    return self.parts > other.parts

  def __ge__(self, other):
    return self.parts >= other.parts

  def __hash__(self):
    return hash(self.parts)

  def __str__(self):
    return '.'.join([str(part) for part in self.parts])

  def __repr__(self):
    return 'Revision(%r)' % (str(self),)


Revision.Empty = Revision(())
