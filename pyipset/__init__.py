##
#
# This module contains all the public symbols from the library.
#

##
#
# Version
#
from pyipset.config.version import __version__  # noqa: F401

##
#
# Logging setup: the package logger with NullHandler
#
from pyipset.config import log  # noqa: F401
from pyipset.exceptions import (
    AlreadyExists,
    IPSetCommandError,
    IPSetDecodeError,
    IPSetError,
    IPSetLockError,
    IPSetSpecError,
    NoSuchObject,
)
from pyipset.ipset import IPSet
from pyipset.listing import IPSetEntry, IPSetInfo, IPSetListing, decode
from pyipset.lock import IPSetLock
from pyipset.process import Executor, SubprocessExecutor
from pyipset.spec import (
    FAMILY_INET,
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

__all__ = [
    'AlreadyExists',
    'Executor',
    'FAMILY_INET',
    'FAMILY_INET6',
    'HASH_IP',
    'IPSet',
    'IPSetCommandError',
    'IPSetDecodeError',
    'IPSetEntry',
    'IPSetError',
    'IPSetInfo',
    'IPSetListing',
    'IPSetLock',
    'IPSetLockError',
    'IPSetSpec',
    'IPSetSpecError',
    'NoSuchObject',
    'SubprocessExecutor',
    'decode',
    'hash_family',
    'hash_size',
    'ipset_spec',
    'max_element',
    'set_name',
    'set_type',
    'with_comment',
]
