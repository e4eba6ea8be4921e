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

"""This module contains various configuration constants used by cvsgit."""


# The name of the branch that holds trunk revisions (those with
# exactly two components, like '1.7'):
MAIN_BRANCH = 'MAIN'

# The marker component of a CVS branch tag number ('1.4.0.2'):
BRANCH_MARKER = 0

# What is written in front of a log line for each level of
# indentation:
LOG_INDENT = '  '

# The width of the rule lines written by logger.rule_off() and
# logger.double_rule_off():
LOG_RULE_WIDTH = 72

# The identity used for tags when nothing else is configured:
DEFAULT_TAGGER_NAME = 'nobody'
DEFAULT_TAGGER_EMAIL_DOMAIN = 'localhost'

# The name of the statistics summary header:
STATISTICS_TITLE = 'cvsgit Statistics:'
