import subprocess
import threading
from collections.abc import Generator, Iterable, Sequence
from typing import Union

import pytest

from pyipset.ipset import IPSet
from pyipset.process import Executor

FakeAction = Union[bytes, str, BaseException]


def success(output: Union[bytes, str] = b'') -> bytes:
    '''A scripted successful run with the given output.'''
    if isinstance(output, str):
        output = output.encode('utf-8')
    return output


def failure(
    output: Union[bytes, str] = b'', returncode: int = 1
) -> subprocess.CalledProcessError:
    '''A scripted failed run, like `ipset` exiting with an error.'''
    if isinstance(output, str):
        output = output.encode('utf-8')
    return subprocess.CalledProcessError(
        returncode, [], output=output, stderr=None
    )


class FakeExecutor(Executor):
    '''A recorded-call executor.

    Provided by `fake_executor` fixture.

    Does not run any process: every `execute()` call is recorded
    in `calls` as `[command, *argv]`, and answered with the next
    item of `script`. Bytes or strings are returned as the command
    output, exceptions are raised.
    '''

    __test__ = False

    def __init__(self, script: Iterable[FakeAction] = ()):
        self.script: list[FakeAction] = list(script)
        self.calls: list[list[str]] = []
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def push(self, *actions: FakeAction) -> None:
        '''Append actions to the script.'''
        self.script.extend(actions)

    def execute(self, command: str, argv: Sequence[str]) -> bytes:
        with self._lock:
            self.calls.append([command, *argv])
            if not self.script:
                raise AssertionError(
                    f'unexpected call #{len(self.calls)}: {command} {argv}'
                )
            action = self.script.pop(0)
        if isinstance(action, BaseException):
            if isinstance(action, subprocess.CalledProcessError):
                action.cmd = [command, *argv]
            raise action
        return success(action)


@pytest.fixture(name='fake_executor')
def _fake_executor() -> Generator[FakeExecutor]:
    '''Recorded-call executor.

    * **Name**: fake_executor
    * **Scope**: function

    Yield an empty `FakeExecutor`; push the responses before
    calling the code under test:

    .. code-block:: python

        def test_destroy(fake_executor, ipset_runner):
            fake_executor.push(success())
            ipset_runner.destroy('foo')
            assert fake_executor.calls == [
                ['ipset', 'destroy', 'foo', '-o', 'xml']
            ]
    '''
    yield FakeExecutor()


@pytest.fixture(name='ipset_runner')
def _ipset_runner(fake_executor: FakeExecutor) -> Generator[IPSet]:
    '''IPSet runner.

    * **Name**: ipset_runner
    * **Scope**: function
    * **Depends**: fake_executor

    Yield `IPSet` that uses `fake_executor`, so no process is run.
    '''
    yield IPSet(executor=fake_executor)
