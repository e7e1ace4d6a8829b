'''
ipset support.

:class:`IPSet` runs the `ipset` utility and decodes its XML output.
It supports the set and entry lifecycle: create, destroy, list,
add and del.

.. code-block:: python

    from pyipset import IPSet, IPSetEntry, ipset_spec, set_name, with_comment

    ipset = IPSet()
    ipset.create(ipset_spec(set_name('foo'), with_comment()))
    ipset.add('foo', IPSetEntry('172.18.3.2', 'ContainerID: deadbeaf'))
    ipset.list_entries('foo')
    # [IPSetEntry(element='172.18.3.2', comment='ContainerID: deadbeaf')]
    ipset.delete('foo', '172.18.3.2')
    ipset.destroy('foo')

By default `create()` and `add()` are exclusive: they fail with
:class:`AlreadyExists` if the set or the element is already there.
Use `exclusive=False` to pass `-exist` to the utility.
'''

import logging
import subprocess
from contextlib import nullcontext
from typing import Optional, Union

from pyipset import config
from pyipset.exceptions import IPSetDecodeError, exception_factory
from pyipset.listing import IPSetEntry, IPSetListing, decode
from pyipset.lock import IPSetLock
from pyipset.process import Executor, SubprocessExecutor
from pyipset.spec import IPSetSpec

log = logging.getLogger(__name__)


class IPSet:
    '''
    The ipset utility runner.

    The object keeps only the executor and the optional lock,
    so it may be shared between threads as long as the executor
    is thread safe.
    '''

    def __init__(
        self,
        executor: Optional[Executor] = None,
        lock: Optional[IPSetLock] = None,
    ):
        self.executor = executor or SubprocessExecutor()
        self.lock = lock

    def _argv(self, args: list[str], exclusive: bool = True) -> list[str]:
        ret = list(args)
        if not exclusive:
            ret.append('-exist')
        ret.extend(config.ipset_mandatory_args)
        return ret

    def run(self, argv: list[str], context: str) -> bytes:
        '''Run ipset with the argv, wrap errors with the context.'''
        log.debug('%s: %s %s', context, config.ipset_cmd, ' '.join(argv))
        with self.lock or nullcontext():
            try:
                return self.executor.execute(config.ipset_cmd, argv)
            except (subprocess.SubprocessError, OSError) as e:
                raise exception_factory(e, argv, context) from e

    def run_list(self, argv: list[str], context: str) -> IPSetListing:
        output = self.run(argv, context)
        try:
            return decode(output)
        except IPSetDecodeError as e:
            raise IPSetDecodeError(f'{context}: {e}', e.exception) from e

    def create(self, spec: IPSetSpec, exclusive: bool = True) -> None:
        '''
        Create a set with the given spec.

        The spec is validated before running the command, so
        IPSetSpecError is raised without touching the system.

        * exclusive -- if set, raise AlreadyExists if the set exists
        '''
        spec.validate()
        argv = self._argv(spec.create_args(), exclusive)
        self.run(argv, f'error creating set {spec.name}')

    def destroy(self, name: str) -> None:
        '''Destroy the named set.'''
        argv = self._argv(['destroy', name])
        self.run(argv, f'error destroying set {name}')

    def list_sets(self) -> list[str]:
        '''List all the set names, in the order ipset returns them.'''
        argv = self._argv(['list', '-n'])
        return self.run_list(argv, 'error listing sets').names()

    def list_entries(self, name: str) -> list[IPSetEntry]:
        '''List entries of the named set.'''
        argv = self._argv(['list', name])
        listing = self.run_list(argv, f'error listing set {name}')
        return listing.entries(name)

    def add(
        self,
        name: str,
        entry: Union[IPSetEntry, str],
        exclusive: bool = True,
    ) -> None:
        '''
        Add an entry to the named set.

        The entry is either IPSetEntry, or just the element string.
        A non-empty comment requires the set to be created with
        comments enabled.

        * exclusive -- if set, raise AlreadyExists if the entry
          is already added
        '''
        if isinstance(entry, str):
            entry = IPSetEntry(entry)
        argv = self._argv(['add', name] + entry.add_args(), exclusive)
        self.run(argv, f'error adding entry {entry.element} to set {name}')

    def delete(self, name: str, element: Union[IPSetEntry, str]) -> None:
        '''Delete an element from the named set.'''
        if isinstance(element, IPSetEntry):
            element = element.element
        argv = self._argv(['del', name, element])
        self.run(argv, f'error deleting entry {element} from set {name}')
