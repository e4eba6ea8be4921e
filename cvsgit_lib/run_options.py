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

"""This module contains the RunOptions class."""

import sys
import time
import optparse
from optparse import OptionGroup

from cvsgit_lib.version import VERSION
from cvsgit_lib.common import FatalError
from cvsgit_lib.log import logger
from cvsgit_lib.context import Ctx
from cvsgit_lib.inclusion_matcher import InclusionMatcher


usage = """\
Usage: %prog [OPTION...]"""

description="""\
Reconcile the tags, branches and merges of a CVS history so that it can
be imported into git.
"""


class RunOptions(object):
  """Process the command-line options of a cvsgit run.

  The options are stored to Ctx().  Include and exclude rules for tags
  and branches are applied in the order in which they appear on the
  command line."""

  def __init__(self, progname, cmd_args):
    """Process the command-line options, storing run options to Ctx().

    PROGNAME is the name of the program, used in the usage string.
    CMD_ARGS is the list of command-line arguments passed to the
    program."""

    self.progname = progname
    self.cmd_args = cmd_args

    parser = self.parser = optparse.OptionParser(
        usage=usage,
        description=description,
        add_help_option=False,
        )

    # Lists of (pattern, include) of the tag and branch rules, in
    # command-line order:
    parser.set_default('tag_rules', [])
    parser.set_default('branch_rules', [])

    parser.add_option_group(self._get_symbol_options_group())
    parser.add_option_group(self._get_conversion_options_group())
    parser.add_option_group(self._get_information_options_group())

    (self.options, self.args) = parser.parse_args(args=self.cmd_args)

    # Now the log level has been set; log the time when the run started:
    logger.verbose(
        time.strftime(
            'Conversion start time: %Y-%m-%d %I:%M:%S %Z',
            time.localtime(logger.start_time)
            )
        )

    self.process_options()
    self.check_options()

  def _get_symbol_options_group(self):
    group = OptionGroup(self.parser, 'Symbol handling')
    group.add_option(
        '--include-tag', type='string',
        action='callback', callback=self.callback_tag_rule,
        callback_args=(True,),
        help='convert the tags matching the regular expression REGEXP',
        metavar='REGEXP',
        )
    group.add_option(
        '--exclude-tag', type='string',
        action='callback', callback=self.callback_tag_rule,
        callback_args=(False,),
        help='do not convert the tags matching the regular expression REGEXP',
        metavar='REGEXP',
        )
    group.add_option(
        '--include-branch', type='string',
        action='callback', callback=self.callback_branch_rule,
        callback_args=(True,),
        help='convert the branches matching the regular expression REGEXP',
        metavar='REGEXP',
        )
    group.add_option(
        '--exclude-branch', type='string',
        action='callback', callback=self.callback_branch_rule,
        callback_args=(False,),
        help=(
            'do not convert the branches matching the regular expression '
            'REGEXP (the main branch is always converted)'
            ),
        metavar='REGEXP',
        )
    return group

  def _get_conversion_options_group(self):
    group = OptionGroup(self.parser, 'Conversion options')
    group.add_option(
        '--tagger-name', type='string',
        action='store', dest='tagger_name',
        help='record NAME as the creator of tags',
        metavar='NAME',
        )
    group.add_option(
        '--tagger-email', type='string',
        action='store', dest='tagger_email',
        help='record EMAIL as the email address of the creator of tags',
        metavar='EMAIL',
        )
    group.add_option(
        '--no-merges',
        action='store_false', dest='resolve_merges', default=True,
        help='do not attach merge commits to their sources',
        )
    return group

  def _get_information_options_group(self):
    group = OptionGroup(self.parser, 'Information options')
    group.add_option(
        '--version',
        action='callback', callback=self.callback_version,
        help='print the version number',
        )
    group.add_option(
        '--help', '-h',
        action="help",
        help='print this usage message and exit with success',
        )
    group.add_option(
        '--verbose', '-v',
        action='callback', callback=self.callback_verbose,
        help='verbose (may be specified twice for debug output)',
        )
    group.add_option(
        '--quiet', '-q',
        action='callback', callback=self.callback_quiet,
        help='quiet (may be specified twice for very quiet)',
        )
    return group

  def callback_tag_rule(self, option, opt_str, value, parser, include):
    parser.values.tag_rules.append((value, include,))

  def callback_branch_rule(self, option, opt_str, value, parser, include):
    parser.values.branch_rules.append((value, include,))

  def callback_version(self, option, opt_str, value, parser):
    sys.stdout.write(
        '%s version %s\n' % (self.progname, VERSION)
        )
    sys.exit(0)

  def callback_verbose(self, option, opt_str, value, parser):
    logger.increase_verbosity()

  def callback_quiet(self, option, opt_str, value, parser):
    logger.decrease_verbosity()

  def _create_matcher(self, rules):
    matcher = InclusionMatcher()
    for (pattern, include) in rules:
      matcher.add_rule(pattern, include)
    return matcher

  def process_options(self):
    """Store the options to Ctx()."""

    # Convenience var, so we don't have to keep instantiating this Borg.
    ctx = Ctx()
    options = self.options

    ctx.tag_matcher = self._create_matcher(options.tag_rules)
    ctx.branch_matcher = self._create_matcher(options.branch_rules)

    if options.tagger_name is not None:
      ctx.tagger_name = options.tagger_name
    if options.tagger_email is not None:
      ctx.tagger_email = options.tagger_email

    ctx.resolve_merges = options.resolve_merges

  def check_options(self):
    """Check the the run options are OK.

    This should only be called after all options have been processed."""

    if self.args:
      raise FatalError(
          'Unexpected argument(s): %s' % (' '.join(self.args),)
          )

    ctx = Ctx()
    if not ctx.tagger_name.strip():
      raise FatalError('The tagger name must not be empty.')
    if '<' in ctx.tagger_email or '>' in ctx.tagger_email:
      raise FatalError(
          'Invalid tagger email address: %r' % (ctx.tagger_email,)
          )


