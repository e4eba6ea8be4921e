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

"""Store the context (options, etc) for a cvsgit run."""


from cvsgit_lib import config
from cvsgit_lib.inclusion_matcher import InclusionMatcher


class Ctx:
  """Session state for this run of cvsgit.  For example, run-time
  options are stored here.  This class is a Borg, see
  http://aspn.activestate.com/ASPN/Cookbook/Python/Recipe/66531."""

  __shared_state = { }

  def __init__(self):
    self.__dict__ = self.__shared_state
    if self.__dict__:
      return
    # Else, initialize to defaults.
    self.set_defaults()

  def set_defaults(self):
    """Set all parameters to their default values."""

    # Which tags and branches are converted:
    self.tag_matcher = InclusionMatcher()
    self.branch_matcher = InclusionMatcher()

    # The identity recorded as the creator of tags:
    self.tagger_name = config.DEFAULT_TAGGER_NAME
    self.tagger_email = '%s@%s' % (
        config.DEFAULT_TAGGER_NAME, config.DEFAULT_TAGGER_EMAIL_DOMAIN,)

    self.resolve_merges = True

  def get_tagger(self):
    """Return the tagger identity in the form 'Name <email>'."""

    return '%s <%s>' % (self.tagger_name, self.tagger_email,)

  def clean(self):
    """Dispose of items in our dictionary that are not intended to
    live past the end of a pass (identified by exactly one leading
    underscore)."""

    for attr in list(self.__dict__.keys()):
      if (attr.startswith('_') and not attr.startswith('__')
          and not attr.startswith('_Ctx__')):
        delattr(self, attr)


