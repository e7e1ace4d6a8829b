#!/usr/bin/env python
import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(here, 'pyipset', 'config', 'version.py')) as f:
    exec(f.read(), version)

with open(os.path.join(here, 'README.md'), 'r') as readme:
    long_description = readme.read()


setup(name='pyipset',
      version=version['__version__'],
      description='Python binding to the ipset utility',
      long_description=long_description,
      long_description_content_type='text/markdown',
      license='Apache v2',
      packages=['pyipset',
                'pyipset.config',
                'pyipset.fixtures'],
      python_requires='>=3.9',
      install_requires=['xmltodict'],
      extras_require={'dev': ['pytest',
                              'pytest-timeout',
                              'nox']},
      entry_points={'console_scripts': ['pyipset = pyipset.cli:run']},
      classifiers=['License :: OSI Approved :: Apache Software License',
                   'Programming Language :: Python',
                   'Topic :: Software Development :: Libraries :: ' +
                   'Python Modules',
                   'Topic :: System :: Networking',
                   'Topic :: System :: Networking :: Firewalls',
                   'Topic :: System :: Systems Administration',
                   'Operating System :: POSIX :: Linux',
                   'Intended Audience :: Developers',
                   'Intended Audience :: System Administrators',
                   'Programming Language :: Python :: 3',
                   'Development Status :: 4 - Beta'])
