'''
Decoder for the `ipset -o xml` output.

The listing document looks like::

    <ipsets>
      <ipset name="foo">
        <type>hash:ip</type>
        <header>
          <family>inet</family>
          <hashsize>1024</hashsize>
          <maxelem>65536</maxelem>
          ...
        </header>
        <members>
          <member>
            <elem>172.18.3.2</elem>
            <comment>"ContainerID: deadbeaf"</comment>
          </member>
        </members>
      </ipset>
    </ipsets>

`ipset list -n` returns only the `<ipset name="..."/>` elements.
'''

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union
from xml.parsers.expat import ExpatError

import xmltodict

from pyipset.exceptions import IPSetDecodeError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IPSetEntry:
    '''One set member: the element and an optional comment.'''

    element: str
    comment: str = ''

    def add_args(self) -> list[str]:
        '''The entry part of the `ipset add` arguments.'''
        ret = [self.element]
        if self.comment:
            ret += ['comment', self.comment]
        return ret


@dataclass
class IPSetInfo:
    '''One decoded set.

    Header fields are None when the listing does not provide them,
    e.g. in the `ipset list -n` output.
    '''

    name: str
    stype: Optional[str] = None
    family: Optional[str] = None
    hashsize: Optional[int] = None
    maxelem: Optional[int] = None
    entries: list[IPSetEntry] = field(default_factory=list)


class IPSetListing(list):
    '''Decoded sets, in the document order.'''

    def names(self) -> list[str]:
        return [x.name for x in self]

    def get(self, name: str) -> Optional[IPSetInfo]:
        for ipset in self:
            if ipset.name == name:
                return ipset
        return None

    def entries(self, name: str) -> list[IPSetEntry]:
        '''Entries of the named set, or an empty list.'''
        ipset = self.get(name)
        if ipset is None:
            return []
        return list(ipset.entries)


def _strip_quotes(text: str) -> str:
    # ipset prints comments as "..."
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


def _text(node: Any) -> Optional[str]:
    # xmltodict returns None for empty elements, a dict for
    # elements with attributes, and a plain string otherwise
    if node is None:
        return None
    if isinstance(node, dict):
        return node.get('#text')
    return str(node)


def _int(node: Any, tag: str) -> Optional[int]:
    value = _text(node)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise IPSetDecodeError(f'invalid {tag} value {value!r}', e)


def decode_entry(node: Any) -> IPSetEntry:
    if not isinstance(node, dict):
        raise IPSetDecodeError(f'invalid member {node!r}')
    element = _text(node.get('elem'))
    if element is None:
        raise IPSetDecodeError('member without elem')
    comment = _text(node.get('comment')) or ''
    return IPSetEntry(element=element, comment=_strip_quotes(comment))


def decode_set(node: Any) -> IPSetInfo:
    if not isinstance(node, dict) or not node.get('@name'):
        raise IPSetDecodeError(f'set without name: {node!r}')
    header = node.get('header')
    if not isinstance(header, dict):
        header = {}
    members = node.get('members')
    if not isinstance(members, dict):
        members = {}
    return IPSetInfo(
        name=node['@name'],
        stype=_text(node.get('type')),
        family=_text(header.get('family')),
        hashsize=_int(header.get('hashsize'), 'hashsize'),
        maxelem=_int(header.get('maxelem'), 'maxelem'),
        entries=[decode_entry(x) for x in members.get('member') or []],
    )


def decode(output: Union[bytes, str]) -> IPSetListing:
    '''Decode the `ipset -o xml` output into IPSetListing.

    Raises IPSetDecodeError if the output is not a valid listing.
    '''
    try:
        document = xmltodict.parse(output, force_list=('ipset', 'member'))
    except ExpatError as e:
        raise IPSetDecodeError(f'invalid ipset XML output: {e}', e)
    if 'ipsets' not in document:
        raise IPSetDecodeError(
            f'unexpected root element {", ".join(document)!r}'
        )
    root = document['ipsets'] or {}
    if not isinstance(root, dict):
        raise IPSetDecodeError(f'unexpected ipsets content {root!r}')
    ret = IPSetListing(decode_set(x) for x in root.get('ipset') or [])
    log.debug('decoded %i set(s)', len(ret))
    return ret
