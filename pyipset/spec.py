'''
Set specification.

A spec is built from option functions applied over the defaults
from :mod:`pyipset.config`:

.. code-block:: python

    from pyipset.spec import ipset_spec, set_name, hash_size, with_comment

    spec = ipset_spec(set_name('foo'), hash_size(256), with_comment())
    spec.validate()
    spec.create_args()
    # ['create', 'foo', 'hash:ip', 'family', 'inet',
    #  'hashsize', '256', 'maxelem', '65536', 'comment']

The spec is immutable; use :func:`dataclasses.replace` to derive
a modified copy.
'''

from dataclasses import dataclass, field
from typing import Any, Callable

from pyipset import config
from pyipset.exceptions import IPSetSpecError

HASH_IP = 'hash:ip'
VALID_SET_TYPES = (HASH_IP,)

FAMILY_INET = 'inet'
FAMILY_INET6 = 'inet6'
VALID_FAMILIES = (FAMILY_INET, FAMILY_INET6)

# set types that take the family, hashsize and maxelem options
HASH_TYPES = (HASH_IP,)

SpecOption = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class IPSetSpec:
    '''Describes a set to be created.'''

    name: str = ''
    stype: str = field(default_factory=lambda: config.default_set_type)
    family: str = field(default_factory=lambda: config.default_family)
    hashsize: int = field(default_factory=lambda: config.default_hashsize)
    maxelem: int = field(default_factory=lambda: config.default_maxelem)
    comment: bool = False

    def validate(self) -> None:
        '''Check the spec, raise IPSetSpecError on the first bad field.'''
        if not self.name:
            raise IPSetSpecError('name', self.name, 'set name is required')
        if len(self.name) >= config.ipset_maxnamelen:
            raise IPSetSpecError(
                'name',
                self.name,
                f'invalid name {self.name!r}, should be shorter than '
                f'{config.ipset_maxnamelen} characters',
            )
        if self.stype in HASH_TYPES and self.family not in VALID_FAMILIES:
            raise IPSetSpecError(
                'family', self.family, f'invalid hash family {self.family!r}'
            )
        if self.stype not in VALID_SET_TYPES:
            raise IPSetSpecError(
                'stype', self.stype, f'invalid set type {self.stype!r}'
            )
        if self.hashsize <= 0:
            raise IPSetSpecError(
                'hashsize',
                self.hashsize,
                f'invalid hash size value {self.hashsize}, should be >0',
            )
        if self.maxelem <= 0:
            raise IPSetSpecError(
                'maxelem',
                self.maxelem,
                f'invalid max element value {self.maxelem}, should be >0',
            )

    def create_args(self) -> list[str]:
        '''The `ipset create` arguments, without the trailing flags.'''
        ret = ['create', self.name, self.stype]
        if self.stype in HASH_TYPES:
            ret += [
                'family',
                self.family,
                'hashsize',
                str(self.hashsize),
                'maxelem',
                str(self.maxelem),
            ]
        if self.comment:
            ret.append('comment')
        return ret


def set_name(name: str) -> SpecOption:
    '''Set the name.'''

    def option(spec: dict[str, Any]) -> None:
        spec['name'] = name

    return option


def set_type(stype: str) -> SpecOption:
    '''Set the set type, like `hash:ip`.'''

    def option(spec: dict[str, Any]) -> None:
        spec['stype'] = stype

    return option


def hash_family(family: str) -> SpecOption:
    '''Set the hash family, `inet` or `inet6`.'''

    def option(spec: dict[str, Any]) -> None:
        spec['family'] = family

    return option


def hash_size(size: int) -> SpecOption:
    '''Set the initial hash size.'''

    def option(spec: dict[str, Any]) -> None:
        spec['hashsize'] = size

    return option


def max_element(count: int) -> SpecOption:
    '''Set the maximum number of elements the set could hold.'''

    def option(spec: dict[str, Any]) -> None:
        spec['maxelem'] = count

    return option


def with_comment(enabled: bool = True) -> SpecOption:
    '''Enable per-entry comments.'''

    def option(spec: dict[str, Any]) -> None:
        spec['comment'] = enabled

    return option


def ipset_spec(*options: SpecOption) -> IPSetSpec:
    '''Build a spec: apply the options in order over the defaults.

    The result is not validated here, see `IPSetSpec.validate()`.
    '''
    spec: dict[str, Any] = {
        'stype': config.default_set_type,
        'family': config.default_family,
        'hashsize': config.default_hashsize,
        'maxelem': config.default_maxelem,
        'comment': False,
    }
    for option in options:
        option(spec)
    return IPSetSpec(**spec)
