class IPSetError(Exception):
    '''
    Base ipset error
    '''

    pass


class IPSetSpecError(IPSetError, ValueError):
    '''
    Invalid set specification, detected before running any command
    '''

    def __init__(self, field, value, msg=None):
        msg = msg or f'invalid {field} value {value!r}'
        super(IPSetSpecError, self).__init__(msg)
        self.field = field
        self.value = value


class IPSetCommandError(IPSetError):
    '''
    The ipset command failed.

    Keeps the argv, the combined output and the return code
    of the failed command; the underlying error is chained.
    '''

    def __init__(self, msg, argv=None, output='', returncode=None):
        super(IPSetCommandError, self).__init__(msg)
        self.argv = list(argv or [])
        self.output = output
        self.returncode = returncode


class NoSuchObject(IPSetCommandError):
    '''The set or the element does not exist'''


class AlreadyExists(IPSetCommandError):
    '''The set already exists, or the element is already added'''


class IPSetDecodeError(IPSetError):
    '''
    The command output can not be decoded.

    Incapsulates underlying error for the following analysis
    '''

    def __init__(self, msg, exception=None):
        super(IPSetDecodeError, self).__init__(msg)
        self.exception = exception


class IPSetLockError(IPSetError):
    '''
    The ipset lock can not be acquired
    '''

    pass


# ipset messages, see lib/errcode.c in the ipset sources
already_exists_markers = (
    'already exists',
    'already added',
)
no_such_object_markers = (
    'does not exist',
    'not added',
)


def exception_factory(err, argv, context):
    '''
    Build an IPSetCommandError from the executor error.

    The class is picked by the ipset message in the output:
    AlreadyExists, NoSuchObject or the generic IPSetCommandError.
    '''
    output = getattr(err, 'output', None) or b''
    if isinstance(output, bytes):
        output = output.decode('utf-8', 'replace')
    output = output.strip()
    cls = IPSetCommandError
    if any(x in output for x in already_exists_markers):
        cls = AlreadyExists
    elif any(x in output for x in no_such_object_markers):
        cls = NoSuchObject
    reason = output or str(err)
    return cls(
        f'{context}: {reason}',
        argv=argv,
        output=output,
        returncode=getattr(err, 'returncode', None),
    )
