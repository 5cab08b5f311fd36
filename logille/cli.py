# -*- coding: utf-8 -*-

# (C) 2019, Uwe Jugel, @ubunatic
# License: GNU AGPL (see LICENSE file or http://www.gnu.org/licenses)

from logille.errors import LogoError
from logille.interpreter import DEFAULT_WIDTH, DEFAULT_HEIGHT
from logille.repl import Logille, DEFAULT_FILE
import argparse, logging, sys

log = logging.getLogger(__name__)

def main(argv=None):
    p = argparse.ArgumentParser(description='Run logo turtle scripts and draw them with braille characters.')
    add = p.add_argument
    add("--debug",        help='enable debug logs', action='store_true')
    add("--print", "-p",  help='print the turtle frame on exit', action='store_true', dest='_print')
    add("--run",   "-c",  help='logo program lines', nargs='+', default=None, metavar='LINE')
    add("--output", "-o", help='write the final frame to FILE', default=None, metavar='FILE')
    add("--width",        help='canvas width in pixels',  type=int, default=DEFAULT_WIDTH)
    add("--height",       help='canvas height in pixels', type=int, default=DEFAULT_HEIGHT)
    add("--color",        help='draw with ANSI pen colors', action='store_true')
    add("script",         help='logo script file', nargs='?', metavar='SCRIPT')
    args = p.parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(level=level)

    interactive = args.run is None and args.script is None
    try:
        tur = Logille(width=args.width, height=args.height, colored=args.color,
                      autoload=DEFAULT_FILE if interactive else None)
        if args.run is not None:
            tur.run('\n'.join(args.run))
        elif args.script:
            with open(args.script) as f:
                tur.run(f.read())
        else:
            tur.start()
    except LogoError as err:
        source = args.script or (DEFAULT_FILE if interactive else 'program')
        log.error('%s: %s', source, err)
        sys.exit(1)
    except IOError as err:
        log.error('cannot read script: %s', err)
        sys.exit(1)

    if args.output:
        with open(args.output, 'w') as f:
            f.write(tur.frame() + '\n')
    if args._print or (not interactive and not args.output):
        tur.print_frame()
    sys.exit(0)
