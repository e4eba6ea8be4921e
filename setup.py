#!/usr/bin/env python

from setuptools import setup


def get_version():
  "Return the version number of cvsgit."

  from cvsgit_lib.version import VERSION
  return VERSION


setup(
    # Metadata.
    name = "cvsgit",
    version = get_version(),
    description = "Reconcile CVS tags, branches and merges for import into git",
    author = "The cvsgit team",
    license = "Apache-style",
    long_description = """\
cvsgit takes the commits of a CVS repository, grouped from the per-file
CVS history, and reorganizes them so that they can be imported into git:

- every branch becomes a linear stream of commits;
- every tag is made to refer to a single commit, moving or splitting
  commits where CVS recorded the tagged revisions out of order;
- merges recorded by CVS mergepoints are attached to the commit on the
  source branch that they merged from;
- every branch is replayed to check that each file revision directly
  follows the previous one.
""",
    classifiers = [
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Version Control',
        'Topic :: Software Development :: Version Control :: CVS',
        'Topic :: Utilities',
        ],
    python_requires = ">=3.6",
    # Data.
    packages = ["cvsgit_lib"],
    )
