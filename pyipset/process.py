'''
Process execution.

The runner does not spawn processes by itself: it gets an
:class:`Executor`, so the tests may substitute a recorded-call fake
(see :mod:`pyipset.fixtures.executor`) instead of running `ipset`.
'''

import abc
import logging
import os
import subprocess
from collections.abc import Sequence
from typing import Optional, Union

from pyipset import config

log = logging.getLogger(__name__)

# use the config.default_exec_timeout value at the call time
USE_DEFAULT_TIMEOUT = -1


class Executor(abc.ABC):
    '''Runs a command and returns its combined output.

    Implementations must be safe for concurrent calls.
    '''

    @abc.abstractmethod
    def execute(self, command: str, argv: Sequence[str]) -> bytes:
        '''Run `command` with `argv`, return stdout and stderr merged.

        Raises:

        * subprocess.CalledProcessError -- non-zero exit code, the
          combined output is in the `output` attribute
        * subprocess.TimeoutExpired -- the command did not finish in time
        * OSError -- the command can not be started
        '''


class SubprocessExecutor(Executor):
    '''Executor using `subprocess.run()`.'''

    def __init__(
        self,
        timeout: Union[int, float, None] = USE_DEFAULT_TIMEOUT,
        env: Optional[dict[str, str]] = None,
    ):
        self.timeout = timeout
        self.env = env

    def get_env(self) -> dict[str, str]:
        # ipset error messages must not be localized, they are
        # matched by the exception factory
        env = dict(os.environ if self.env is None else self.env)
        env['LANG'] = env['LC_ALL'] = 'C'
        return env

    def execute(self, command: str, argv: Sequence[str]) -> bytes:
        timeout = self.timeout
        if timeout == USE_DEFAULT_TIMEOUT:
            timeout = config.default_exec_timeout
        cmd = [command, *argv]
        log.debug('run %s', cmd)
        process = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=self.get_env(),
            timeout=timeout,
            check=True,
        )
        return process.stdout
