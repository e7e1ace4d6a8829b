import os
import pwd
import shutil

import pytest


def require_user(user):
    if bool(os.environ.get('PYIPSET_TESTS_RO', False)):
        pytest.skip('read-only tests requested')
    if pwd.getpwuid(os.getuid()).pw_name != user:
        pytest.skip('required user %s' % (user))


def require_executable(name):
    if shutil.which(name) is None:
        pytest.skip('required %s not found' % (name))
