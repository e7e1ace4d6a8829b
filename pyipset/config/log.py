import logging
from typing import Optional, TextIO

##
# The package logger
#
# Do NOT touch the root logger -- not to break basicConfig() etc;
# the library stays silent until the application sets up handlers
#
log = logging.getLogger('pyipset')
log.setLevel(0)
log.addHandler(logging.NullHandler())

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def setup(
    level: str = 'INFO', stream: Optional[TextIO] = None
) -> logging.Handler:
    '''Attach a stream handler to the package logger.

    Used by the command line tool; library users should configure
    logging in their application instead.
    '''
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)
    log.setLevel(level)
    return handler
