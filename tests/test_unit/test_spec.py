import dataclasses

import pytest

from pyipset import config
from pyipset.exceptions import IPSetSpecError
from pyipset.spec import (
    FAMILY_INET6,
    HASH_IP,
    IPSetSpec,
    hash_family,
    hash_size,
    ipset_spec,
    max_element,
    set_name,
    set_type,
    with_comment,
)


def test_defaults():
    spec = ipset_spec(set_name('foo'))
    spec.validate()
    assert spec == IPSetSpec(
        name='foo',
        stype=HASH_IP,
        family='inet',
        hashsize=1024,
        maxelem=65536,
        comment=False,
    )


def test_keyword_defaults():
    assert IPSetSpec(name='foo') == ipset_spec(set_name('foo'))


def test_options_order():
    spec = ipset_spec(set_name('foo'), hash_size(256), hash_size(512))
    assert spec.hashsize == 512


def test_config_defaults(monkeypatch):
    monkeypatch.setattr(config, 'default_hashsize', 4096)
    monkeypatch.setattr(config, 'default_maxelem', 128)
    spec = ipset_spec(set_name('foo'))
    assert spec.hashsize == 4096
    assert spec.maxelem == 128
    assert IPSetSpec(name='foo').hashsize == 4096


def test_immutable():
    spec = ipset_spec(set_name('foo'))
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.hashsize = 1
    assert dataclasses.replace(spec, hashsize=1).hashsize == 1


@pytest.mark.parametrize(
    'options',
    (
        (set_name('foo'),),
        (set_name('foo'), set_type(HASH_IP)),
        (set_name('foo'), set_type(HASH_IP), hash_size(256), max_element(128)),
        (set_name('foo'), hash_family(FAMILY_INET6)),
        (set_name('foo'), with_comment()),
        (set_name('x' * 31),),
    ),
)
def test_valid(options):
    ipset_spec(*options).validate()


@pytest.mark.parametrize(
    'options,field,value,message',
    (
        (
            (set_name('foo'), set_type('invalid')),
            'stype',
            'invalid',
            "invalid set type 'invalid'",
        ),
        (
            (set_name('foo'), hash_family('inet4')),
            'family',
            'inet4',
            "invalid hash family 'inet4'",
        ),
        (
            (set_name('foo'), set_type(HASH_IP), hash_size(-1)),
            'hashsize',
            -1,
            'invalid hash size value -1, should be >0',
        ),
        (
            (set_name('foo'), hash_size(0)),
            'hashsize',
            0,
            'invalid hash size value 0, should be >0',
        ),
        (
            (set_name('foo'), hash_size(1024), max_element(0)),
            'maxelem',
            0,
            'invalid max element value 0, should be >0',
        ),
        (
            (set_name('foo'), max_element(-65536)),
            'maxelem',
            -65536,
            'invalid max element value -65536, should be >0',
        ),
        ((), 'name', '', 'set name is required'),
    ),
)
def test_invalid(options, field, value, message):
    spec = ipset_spec(*options)
    with pytest.raises(IPSetSpecError) as e:
        spec.validate()
    assert e.value.field == field
    assert e.value.value == value
    assert str(e.value) == message


def test_invalid_name_length():
    with pytest.raises(IPSetSpecError) as e:
        ipset_spec(set_name('x' * 32)).validate()
    assert e.value.field == 'name'


def test_invalid_spec_is_value_error():
    with pytest.raises(ValueError):
        ipset_spec(set_name('foo'), hash_size(0)).validate()


def test_family_checked_before_type():
    # an unknown type takes no family, so only the type is reported
    spec = ipset_spec(set_name('foo'), set_type('bogus'), hash_family('x'))
    with pytest.raises(IPSetSpecError) as e:
        spec.validate()
    assert e.value.field == 'stype'


@pytest.mark.parametrize(
    'options,args',
    (
        (
            (set_name('foo'),),
            [
                'create',
                'foo',
                'hash:ip',
                'family',
                'inet',
                'hashsize',
                '1024',
                'maxelem',
                '65536',
            ],
        ),
        (
            (set_name('foo'), hash_size(256), max_element(128)),
            [
                'create',
                'foo',
                'hash:ip',
                'family',
                'inet',
                'hashsize',
                '256',
                'maxelem',
                '128',
            ],
        ),
        (
            (
                set_name('foo'),
                hash_family(FAMILY_INET6),
                hash_size(256),
                max_element(128),
                with_comment(),
            ),
            [
                'create',
                'foo',
                'hash:ip',
                'family',
                'inet6',
                'hashsize',
                '256',
                'maxelem',
                '128',
                'comment',
            ],
        ),
        (
            (set_name('foo'), with_comment(False)),
            [
                'create',
                'foo',
                'hash:ip',
                'family',
                'inet',
                'hashsize',
                '1024',
                'maxelem',
                '65536',
            ],
        ),
    ),
)
def test_create_args(options, args):
    assert ipset_spec(*options).create_args() == args
