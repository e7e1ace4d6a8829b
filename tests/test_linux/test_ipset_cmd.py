from uuid import uuid4

import pytest
from utils import require_executable, require_user

from pyipset import (
    AlreadyExists,
    IPSet,
    IPSetEntry,
    NoSuchObject,
    ipset_spec,
    set_name,
    with_comment,
)


@pytest.fixture
def ipset():
    require_user('root')
    require_executable('ipset')
    return IPSet()


@pytest.fixture
def name(ipset):
    name = str(uuid4())[:16]
    yield name
    try:
        ipset.destroy(name)
    except NoSuchObject:
        pass


def test_create_destroy(ipset, name):
    ipset.create(ipset_spec(set_name(name)))
    assert name in ipset.list_sets()
    ipset.destroy(name)
    assert name not in ipset.list_sets()


def test_create_exclusive(ipset, name):
    spec = ipset_spec(set_name(name))
    ipset.create(spec)
    with pytest.raises(AlreadyExists):
        ipset.create(spec)
    ipset.create(spec, exclusive=False)


def test_add_delete(ipset, name):
    ipset.create(ipset_spec(set_name(name), with_comment()))
    entries = [
        IPSetEntry('172.18.3.3', 'ContainerID: deadbeafbeaf'),
        IPSetEntry('172.18.3.2', 'ContainerID: deadbeaf'),
    ]
    for entry in entries:
        ipset.add(name, entry)
    assert sorted(ipset.list_entries(name), key=lambda x: x.element) == (
        sorted(entries, key=lambda x: x.element)
    )
    with pytest.raises(AlreadyExists):
        ipset.add(name, entries[0])
    ipset.add(name, entries[0], exclusive=False)
    ipset.delete(name, '172.18.3.2')
    assert ipset.list_entries(name) == [entries[0]]
    with pytest.raises(NoSuchObject):
        ipset.delete(name, '172.18.3.2')


def test_destroy_missing(ipset):
    with pytest.raises(NoSuchObject):
        ipset.destroy(str(uuid4())[:16])
