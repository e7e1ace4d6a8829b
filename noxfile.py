import getpass
import json
import os
import sys

import nox

nox.options.envdir = f'./.nox-{getpass.getuser()}'
nox.options.reuse_existing_virtualenvs = False
nox.options.sessions = ['linter', 'unit', 'linux']


def load_global_config():
    if len(sys.argv) > 1 and sys.argv[-2] == '--' and len(sys.argv[-1]):
        return json.loads(sys.argv[-1])
    return {}


global_config = load_global_config()
if global_config.get('fast'):
    nox.options.reuse_venv = 'yes'
    nox.options.no_install = True


def add_session_config(func):
    '''Decorator to load the session config.

    Usage::

        @nox.session
        @add_session_config
        def my_session_func(session, config):
            pass

    Command line usage::

        nox -e my_session_name -- '{"option": value}'

    The session config must be a valid JSON dictionary of options.
    '''

    def wrapper(session):
        return func(session, global_config)

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    wrapper.__has_user_config__ = True
    return wrapper


def options(module, config):
    '''Return pytest options set.'''
    ret = [
        'python',
        '-m',
        'pytest',
        f'-r{config.get("summary", "x")}',
        f'--timeout={config.get("timeout", 60)}',
        '--basetemp',
        './log',
    ]
    if config.get('exitfirst', True):
        ret.append('--exitfirst')
    if config.get('verbose', True):
        ret.append('--verbose')
    if config.get('fail_on_warnings'):
        ret.insert(1, 'error')
        ret.insert(1, '-W')
    if config.get('pdb'):
        ret.append('--pdb')
    if config.get('sub'):
        module = f'{module}/{config["sub"]}'
    ret.append(module)
    return ret


def setup_venv_dev(session, config=None):
    if config is None:
        config = {}
    if config.get('fast'):
        session.chdir('tests')
        return os.getcwd()
    if not config.get('reuse'):
        session.install('--upgrade', 'pip')
        session.install('.[dev]')
    tmpdir = os.path.abspath(session.create_tmp())
    session.run('cp', '-a', 'tests', tmpdir, external=True)
    session.chdir(f'{tmpdir}/tests')
    return tmpdir


@nox.session
@add_session_config
def linter(session, config):
    '''Run code checks and linters.'''
    if not config.get('fast'):
        session.install('flake8')
    session.run('python', '-m', 'flake8', 'pyipset', 'tests', 'noxfile.py')


@nox.session
@add_session_config
def unit(session, config):
    '''Run unit tests.'''
    setup_venv_dev(session, config)
    session.run(*options('test_unit', config))


@nox.session
@add_session_config
def linux(session, config):
    '''Run tests against the real ipset. Requires root to run.'''
    setup_venv_dev(session, config)
    session.run(*options('test_linux', config))


@nox.session
def build(session):
    '''Run package build.'''
    session.install('build')
    session.install('twine')
    session.run('python', '-m', 'build')
    session.run('python', '-m', 'twine', 'check', 'dist/*')
