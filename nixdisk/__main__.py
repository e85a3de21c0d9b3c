"""
Entry point for the Nixdorf 8820 disk image utility.

Allows running as: python -m nixdisk
"""

import argparse
import sys

from . import __version__
from .commands import cmd_copy, cmd_info, cmd_list, cmd_show, cmd_textcopy, cmd_verify
from .formatter import OutputFormatter
from .logging_config import setup_logging, QUIET, NORMAL, VERBOSE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='nixdisk',
        description='Nixdorf 8820 hard-sectored 8" floppy disk image reader',
    )

    # Global options
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show detailed output')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress non-essential output')
    parser.add_argument('--json', action='store_true', help='Output in JSON format')
    parser.add_argument('--config', metavar='FILE',
                        help='Settings file (default: ~/.config/nixdisk/settings.json)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    info_parser = subparsers.add_parser('info', help='Show volume label and headers',
                                        epilog='Use -v for the error map and every header.')
    info_parser.add_argument('image', help='Disk image path')

    list_parser = subparsers.add_parser('list', help='List the main directory')
    list_parser.add_argument('image', help='Disk image path')

    show_parser = subparsers.add_parser('show', help="Show a file's header labels")
    show_parser.add_argument('image', help='Disk image path')
    show_parser.add_argument('name', help='File name as listed in the directory')

    copy_parser = subparsers.add_parser('copy', help='Extract files from the disk image')
    copy_parser.add_argument('image', help='Disk image path')
    copy_parser.add_argument('name', help='File name or wildcard pattern (*, ?)')
    copy_parser.add_argument('dest', nargs='?', default='.',
                             help='Destination file or directory (default: current directory)')

    verify_parser = subparsers.add_parser('verify', help='Check every file header and extent')
    verify_parser.add_argument('image', help='Disk image path')

    textcopy_parser = subparsers.add_parser('textcopy',
                                            help='Convert an extracted text file to plain text')
    textcopy_parser.add_argument('input', help='Extracted text file')
    textcopy_parser.add_argument('output', nargs='?', help='Output file (default: stdout)')

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging based on verbosity flags
    if args.quiet:
        setup_logging(level=QUIET)
    elif args.verbose:
        setup_logging(level=VERBOSE)
    else:
        setup_logging(level=NORMAL)

    formatter = OutputFormatter(json_mode=args.json)

    match args.command:
        case 'info':
            return cmd_info(args, formatter)
        case 'list':
            return cmd_list(args, formatter)
        case 'show':
            return cmd_show(args, formatter)
        case 'copy':
            return cmd_copy(args, formatter)
        case 'verify':
            return cmd_verify(args, formatter)
        case 'textcopy':
            return cmd_textcopy(args, formatter)
        case _:
            formatter.error(f"Unknown command: {args.command}")
            return 1


if __name__ == '__main__':
    sys.exit(main())
