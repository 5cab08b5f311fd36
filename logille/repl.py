# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""
This module implements a REPL to run logo scripts line by line and draw the
result with braille characters on the console.

To start this module, run: `logille` or `python -m logille`.

The module can also be embedded using the `logille.Logille` class.
See the class docu for more details.
"""

import re, logging
from inspect import signature
from prompt_toolkit import prompt
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.lexers import PygmentsLexer

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import Text, Name, Keyword, Comment, Number, Operator, Punctuation

from logille.errors import LogoError
from logille.formatter import format_procedure, format_script
from logille.interpreter import Interpreter, DEFAULT_WIDTH, DEFAULT_HEIGHT
from logille.parser import preprocess, split_words
from logille.syntax import KEYWORDS, QUERIES, OPERATORS, format_value
from logille.turtle import TurtleCanvas

log = logging.getLogger(__name__)

DEFAULT_FILE = '.logille'

usage = """
# This is Logille, a logo REPL running on top of Drawille braille graphics.
#
# License:   GNU AGPLv3 (see LICENSE file or http://www.gnu.org/licenses)

Type 'q' or 'quit' to leave. Values are written with a leading quote, variables
with a leading colon, and operators go in front of their operands:

    PENDOWN
    FORWARD "20
    TURN "90
    MAKE "SIZE * "2 "10
    FORWARD :SIZE

Blocks are closed with ']', procedures with 'END':

    TO SQUARE "LEN
        MAKE "I "0
        WHILE LT :I "4 [
            FORWARD :LEN
            TURN "90
            MAKE "I + :I "1
        ]
    END
    SQUARE "30

Other commands are:

    help          # show this help
    print         # print the turtle frame to the screen
    clear         # clear the screen (but do not reset the turtle)
    reset         # reset the turtle, the variables and the screen
    vars          # list the global variables
    inspect NAME  # show the definition of a procedure
    save [FILE]   # save all procedures (default: .logille)
    load [FILE]   # run a script file (default: .logille)
    quit          # exit Logille

"""

class StopLogille(Exception):  pass
class SessionError(LogoError): pass


class LogoLexer(RegexLexer):
    """LogoLexer is a simple RegexLexer,
    required for pygments syntax highlighting."""
    name = 'Logo'
    aliases = ['logo', 'logille']
    filenames = ['*.lg', '*.logo']
    flags = re.MULTILINE

    tokens = dict(root=[
        (r'\s+',                                 Text),
        (r'//\s.*$',                             Comment.Single),
        (r'(TO)(\s+)(\S+)',                      bygroups(Keyword.Declaration, Text, Name.Function)),
        (words(KEYWORDS, suffix=r'(?=\s|$)'),    Keyword),
        (words(QUERIES, suffix=r'(?=\s|$)'),     Name.Builtin),
        (words(tuple(OPERATORS), suffix=r'(?=\s|$)'), Operator),
        (r'"(TRUE|FALSE)(?=\s|$)',               Keyword.Constant),
        (r'"\S+',                                Number),
        (r':\S+',                                Name.Variable),
        (r'[\[\]](?=\s|$)',                      Punctuation),
        (r'\S+',                                 Name),
    ])


def open_blocks(lines):
    """open_blocks counts the blocks opened but not yet closed by some lines"""
    depth = 0
    for lineno, line in preprocess('\n'.join(lines)):
        head = split_words(line, lineno)[0].text
        if head == "TO" or (head in ("IF", "WHILE") and line.endswith("[")): depth += 1
        elif head in ("]", "END"):                                             depth -= 1
    return depth


class ConsolePrinter(object):
    """ConsolePrinter is a Mixin Class for the logo VM for printng output to the console.
    All output is handled in this class, the BaseVM class is output agnostic.
    """
    def print_text(tur, *args):
        """print_text is the text output function of the logo VM,
        for the ConsolePrinter it is used to print the turtles current frame.
        It uses Python's print function."""
        print(*args)

    def print_frame(tur):
        """print_frame prints the canvas within the configured bounds"""
        tur.print_text(tur.frame())

    def print_func(tur, name):
        """print_func prints the definition of one of the procedures"""
        tur.print_text(tur.format_func(name))


class BaseVM(ConsolePrinter):
    """BaseVM connects an `Interpreter` to a braille `TurtleCanvas` and adds
    the lower-case session commands. It can run logo scripts and print the result.
    Usage Example:

        tur = BaseVM()
        tur.run('PENDOWN\\nFORWARD "10')
        tur.print_frame()

    """
    def __init__(tur, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT, colored=False):
        tur.canvas = TurtleCanvas()
        tur.logo = Interpreter(tur.canvas, width, height)
        tur.colored = colored
        tur.commands = {}
        for k,v in [('quit',    tur.quit),
                    ('q',       tur.quit),
                    ('help',    tur.help),
                    ('print',   tur.print_frame),
                    ('clear',   tur.canvas.clear),
                    ('reset',   tur.reset),
                    ('vars',    tur.print_vars),
                    ('inspect', tur.print_func)]:
            tur.add_command(k,v)
        super().__init__()

    def add_command(tur, cmd, fn):
        log.debug("adding command: %s", cmd)
        assert cmd not in tur.commands, "safe overriding commands not supported"
        tur.commands[cmd] = fn

    @property
    def funcs(tur): return tur.logo.procedures

    def run(tur, text):
        """run runs a script, returns the parsed commands"""
        return tur.logo.run(text)

    def run_command(tur, line):
        """run_command runs a session command such as `inspect SQUARE`,
        returns False if the line is not a session command"""
        parts = line.split()
        if not parts or parts[0] not in tur.commands: return False
        fn, args = tur.commands[parts[0]], parts[1:]
        try: signature(fn).bind(*args)
        except TypeError:
            raise SessionError('wrong arguments for {}: {}'.format(parts[0], ' '.join(args) or 'none')) from None
        log.debug("running: %s%s", parts[0], tuple(args))
        fn(*args)
        return True

    def quit(tur): raise StopLogille("quit")

    def help(tur): tur.print_text(usage)

    def reset(tur):
        tur.logo.reset()
        tur.canvas.clear()

    def frame(tur):
        logo = tur.logo
        return tur.canvas.frame(0, 0, logo.width, logo.height, colored=tur.colored)

    def format_func(tur, name):
        proc = tur.funcs.get(name)
        if proc is None: return 'no procedure named {}'.format(name)
        return format_procedure(proc)

    def print_vars(tur):
        for name, value in sorted(tur.logo.globals.bindings.items()):
            tur.print_text('{} = {}'.format(name, format_value(value)))


class WithSaveAndLoad(object):
    def __init__(tur, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tur.add_command('save', tur.save)
        tur.add_command('load', tur.load)

    def save(tur, filename=DEFAULT_FILE):
        """save writes all procedures to a script file, callees first"""
        with open(filename, 'w') as f:
            f.write('{}\n'.format(format_script(tur.funcs)))
        log.info('saved: %s', list(tur.funcs))

    def load(tur, filename=DEFAULT_FILE, silent=False):
        """load runs a script file in the session, returns the parsed commands"""
        if silent: info = log.debug
        else:      info = log.info
        try:
            with open(filename) as f:
                text = f.read()
        except IOError:
            info('nothing to load from %s', filename)
            return ()
        commands = tur.run(text)
        info('loaded %s', filename)
        return commands


class Repl(BaseVM):
    """Repl reads logo lines interactively. Lines are collected until all
    opened blocks are closed, then the collected script is run."""
    def __init__(tur, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tur.history = InMemoryHistory()
        tur.lino = 1
        tur.pending = []

    def start(tur):
        """start the repl loop"""
        log.debug("starting REPL")
        tur.help()
        while True:
            try: tur.repl(); tur.lino += 1
            except (StopLogille, EOFError): return True
            except KeyboardInterrupt:
                tur.pending = []
                tur.print_text("Type 'q' or 'quit' to stop Logille.")
            except (LogoError, IOError) as err: tur.print_text(err)  # script and file errors are printed to repl

    def repl(tur):
        """run the repl once: first read the input, then feed it to the VM"""
        names = list(KEYWORDS + QUERIES) + list(tur.funcs) + list(tur.commands)
        completer = WordCompleter(names)
        marker = '...' if tur.pending else '[{}]'.format(tur.lino)
        text = prompt('Logille {}: '.format(marker),
                      history=tur.history,
                      lexer=PygmentsLexer(LogoLexer),
                      completer=completer)
        tur.feed(text)

    def feed(tur, text):
        """feed takes one line of input. Session commands run right away,
        script lines are run as soon as their blocks are closed.
        Returns True if a script was run."""
        if not tur.pending and not text.strip(): return False
        if not tur.pending and tur.run_command(text): return False

        tur.pending.append(text)
        try:
            if open_blocks(tur.pending) > 0: return False
            script, tur.pending = '\n'.join(tur.pending), []
            commands = tur.run(script)
        except LogoError as err:
            tur.pending = []
            tur.print_text(err)
            return False

        if len(commands) > 0: tur.print_frame()
        return True


class Logille(WithSaveAndLoad, Repl):
    """Logille is the interactive logo session, it loads saved procedures on start.
    Usage Example:

        tur = Logille(width=100, height=60)
        tur.feed('PENDOWN')
        tur.feed('FORWARD "20')
        tur.start()

    """
    def __init__(tur, *args, **kwargs):
        autoload = kwargs.pop('autoload', DEFAULT_FILE)
        super().__init__(*args, **kwargs)
        if autoload: tur.load(autoload, silent=True)
