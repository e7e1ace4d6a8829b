import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import Optional, Sequence

from pyipset import config
from pyipset.config import log as logconfig
from pyipset.exceptions import IPSetError
from pyipset.ipset import IPSet
from pyipset.listing import IPSetEntry
from pyipset.lock import IPSetLock
from pyipset.process import Executor
from pyipset.spec import (
    VALID_FAMILIES,
    hash_family,
    hash_size,
    ipset_spec,
    max_element,
    set_name,
    set_type,
    with_comment,
)

LOG = logging.getLogger(__name__)


def get_psr() -> ArgumentParser:
    psr = ArgumentParser(
        description='Manage ipset sets and entries with pyipset.',
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    psr.add_argument(
        '--log-level',
        help='Logging level to use.',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
        default='INFO',
    )
    psr.add_argument(
        '--lock',
        help='Hold an advisory lock on this file while running ipset.',
        metavar='PATH',
    )
    sub = psr.add_subparsers(dest='command', required=True)

    create = sub.add_parser('create', help='Create a set.')
    create.add_argument('name')
    create.add_argument('--type', default=config.default_set_type)
    create.add_argument(
        '--family', default=config.default_family, choices=VALID_FAMILIES
    )
    create.add_argument(
        '--hashsize', type=int, default=config.default_hashsize
    )
    create.add_argument('--maxelem', type=int, default=config.default_maxelem)
    create.add_argument(
        '--comment',
        default=False,
        action='store_true',
        help='Enable per-entry comments.',
    )
    create.add_argument(
        '--exist',
        default=False,
        action='store_true',
        help='Do not fail if the set already exists.',
    )

    destroy = sub.add_parser('destroy', help='Destroy a set.')
    destroy.add_argument('name')

    lst = sub.add_parser(
        'list', help='List set names, or entries of the named set.'
    )
    lst.add_argument('name', nargs='?')

    add = sub.add_parser('add', help='Add an entry to a set.')
    add.add_argument('name')
    add.add_argument('element')
    add.add_argument('--comment', default='')
    add.add_argument(
        '--exist',
        default=False,
        action='store_true',
        help='Do not fail if the entry is already added.',
    )

    delete = sub.add_parser('del', help='Delete an entry from a set.')
    delete.add_argument('name')
    delete.add_argument('element')

    smoke = sub.add_parser(
        'smoke',
        help='Create a set, add, list and delete an entry, destroy the set.',
    )
    smoke.add_argument('--name', default='foo')
    smoke.add_argument('--element', default='172.18.3.2')
    smoke.add_argument('--comment', default='ContainerID: deadbeaf')
    return psr


def run_smoke(ipset: IPSet, args: Namespace) -> None:
    '''Run the whole lifecycle against the real ipset.'''
    spec = ipset_spec(set_name(args.name), with_comment())
    ipset.create(spec, exclusive=False)
    print('Create Set: OK')
    ipset.add(args.name, IPSetEntry(args.element, args.comment), False)
    print('Add Entry to Set: OK')
    ipset.list_entries(args.name)
    print('List entries: OK')
    ipset.delete(args.name, args.element)
    print('Delete Entry from Set: OK')
    ipset.destroy(args.name)
    print('Destroy Set: OK')


def run_command(ipset: IPSet, args: Namespace) -> None:
    if args.command == 'create':
        spec = ipset_spec(
            set_name(args.name),
            set_type(args.type),
            hash_family(args.family),
            hash_size(args.hashsize),
            max_element(args.maxelem),
            with_comment(args.comment),
        )
        ipset.create(spec, exclusive=not args.exist)
    elif args.command == 'destroy':
        ipset.destroy(args.name)
    elif args.command == 'list':
        if args.name is None:
            for name in ipset.list_sets():
                print(name)
        else:
            for entry in ipset.list_entries(args.name):
                if entry.comment:
                    print(f'{entry.element} comment "{entry.comment}"')
                else:
                    print(entry.element)
    elif args.command == 'add':
        entry = IPSetEntry(args.element, args.comment)
        ipset.add(args.name, entry, exclusive=not args.exist)
    elif args.command == 'del':
        ipset.delete(args.name, args.element)
    elif args.command == 'smoke':
        run_smoke(ipset, args)


def main(
    argv: Optional[Sequence[str]] = None, executor: Optional[Executor] = None
) -> int:
    psr = get_psr()
    args = psr.parse_args(argv)
    level = logconfig.log.level
    handler = logconfig.setup(args.log_level, sys.stderr)

    lock = IPSetLock(args.lock) if args.lock else None
    ipset = IPSet(executor=executor, lock=lock)
    try:
        run_command(ipset, args)
    except IPSetError as err:
        LOG.error('%s', err)
        return 1
    finally:
        logconfig.log.removeHandler(handler)
        logconfig.log.setLevel(level)
    return 0


def run():
    # for the console_scripts entrypoint
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':  # pragma: no cover
    run()
