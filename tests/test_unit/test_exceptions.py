import subprocess

import pytest

from pyipset.exceptions import (
    AlreadyExists,
    IPSetCommandError,
    IPSetError,
    IPSetSpecError,
    NoSuchObject,
    exception_factory,
)


@pytest.mark.parametrize(
    'output,cls',
    (
        (
            b'ipset v7.6: Set cannot be created: '
            b'set with the same name already exists',
            AlreadyExists,
        ),
        (
            b"ipset v7.6: Element cannot be added to the set: "
            b"it's already added",
            AlreadyExists,
        ),
        (
            b'ipset v7.6: The set with the given name does not exist',
            NoSuchObject,
        ),
        (
            b"ipset v7.6: Element cannot be deleted from the set: "
            b"it's not added",
            NoSuchObject,
        ),
        (
            b'ipset v7.6: Set cannot be destroyed: '
            b'it is in use by a kernel component',
            IPSetCommandError,
        ),
        (b'', IPSetCommandError),
    ),
)
def test_exception_factory(output, cls):
    err = subprocess.CalledProcessError(1, ['ipset'], output=output)
    exc = exception_factory(err, ['destroy', 'foo'], 'context')
    assert type(exc) is cls
    assert exc.argv == ['destroy', 'foo']
    assert exc.returncode == 1
    assert exc.output == output.decode('utf-8')


def test_exception_factory_message():
    err = subprocess.CalledProcessError(
        1, ['ipset'], output=b'ipset v7.6: Syntax error\n'
    )
    exc = exception_factory(err, [], 'error destroying set foo')
    assert str(exc) == 'error destroying set foo: ipset v7.6: Syntax error'


def test_exception_factory_no_output():
    err = PermissionError(13, 'Permission denied')
    exc = exception_factory(err, ['list', '-n'], 'error listing sets')
    assert type(exc) is IPSetCommandError
    assert exc.returncode is None
    assert exc.output == ''
    assert str(exc) == f'error listing sets: {err}'


def test_hierarchy():
    for cls in (IPSetCommandError, AlreadyExists, NoSuchObject):
        assert issubclass(cls, IPSetError)
    assert issubclass(IPSetSpecError, ValueError)
    err = IPSetSpecError('hashsize', -1)
    assert str(err) == "invalid hashsize value -1"
