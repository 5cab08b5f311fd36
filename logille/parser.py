# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""
This module turns logo script text into a command tree.

Parsing runs in three steps:

1. `preprocess` drops blank lines and `// ` comments and numbers the rest.
2. Each line is split into words by a small lark grammar. Words starting with
   `"` are literals, words starting with `:` are variables, all other words
   are bare words (keywords, queries, operators, procedure names, brackets).
3. The `Parser` walks the lines with a `LineCursor`, recursing into
   `IF ... [`, `WHILE ... [` and `TO ... END` blocks, and compiles the operand
   words of each command with `compile_expression`.

Expressions put the operator in front of its operands: `- "4 "2` is 4 - 2.
They are compiled right to left with an operand stack, where the first pop
is the left operand.
"""

import logging
from collections import namedtuple

import lark

from logille.errors import ParseError
from logille.syntax import (
    MOVES, QUERIES, OPERATORS, RESERVED, SETTER_COMMANDS, parse_number,
    Literal, Variable, Query, BinaryOp,
    PenUp, PenDown, Move, Assign, AddAssign, If, While, Call, Procedure,
)

log = logging.getLogger(__name__)

COMMENT = '// '

Word = namedtuple('Word', 'kind text column')
Line = namedtuple('Line', 'lineno text words')


@lark.v_args(inline=True)
class WordTransformer(lark.Transformer):
    def literal(t, token):  return Word('literal',  str(token), token.column)
    def variable(t, token): return Word('variable', str(token), token.column)
    def bare(t, token):     return Word('bare',     str(token), token.column)
    def line(t, *words):    return list(words)


_words = lark.Lark(r"""
    line: word*
    word: QUOTED   -> literal
        | COLON    -> variable
        | BAREWORD -> bare

    QUOTED.2: /"\S*/
    COLON.2:  /:\S*/
    BAREWORD: /\S+/

    %ignore /\s+/
    """, start='line', parser='lalr', lexer='basic', transformer=WordTransformer())


def split_words(text, lineno=None):
    """split_words splits one script line into classified `Word`s."""
    try:
        return _words.parse(text)
    except lark.exceptions.LarkError as err:
        raise ParseError('cannot split line into words: {}'.format(err), lineno)


def preprocess(text):
    """preprocess yields `(lineno, line)` for every line that is neither blank
    nor a comment. Lines are stripped and numbered from 1."""
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if line == '' or line.startswith(COMMENT): continue
        yield lineno, line


class LineCursor(object):
    """LineCursor iterates the statement lines of a script, splitting each line
    into words on the fly. All nested block parsers share one cursor, so a block
    parser resumes right after the lines its inner blocks consumed."""

    def __init__(self, text):
        self._lines = preprocess(text)
        self.current = None

    def __iter__(self): return self

    def __next__(self):
        lineno, text = next(self._lines)
        self.current = Line(lineno, text, split_words(text, lineno))
        return self.current


def compile_leaf(word, lineno=None):
    if word.kind == 'literal':
        body = word.text[1:]
        if body == 'TRUE':  return Literal(True)
        if body == 'FALSE': return Literal(False)
        value = parse_number(body)
        if value is None:
            raise ParseError('unrecognized literal {}'.format(word.text), lineno)
        return Literal(value)

    if word.kind == 'variable':
        if len(word.text) < 2:
            raise ParseError('variable reference without a name', lineno)
        return Variable(word.text[1:])

    if word.text in QUERIES:
        return Query(word.text)

    raise ParseError('unexpected word in expression: {}'.format(word.text), lineno)


def compile_expression(words, lineno=None):
    """compile_expression compiles a list of words into an expression tree.

    Words are scanned from right to left. Values are pushed on a stack and each
    operator pops its left operand first and its right operand second, so
    operators precede their operands in the script: `+ :X "1`, `LT :X "3`.
    Exactly one value must be left on the stack.
    """
    stack = []
    for word in reversed(words):
        if word.kind == 'bare' and word.text in OPERATORS:
            if len(stack) < 2:
                raise ParseError('too few operands for {}'.format(word.text), lineno)
            left = stack.pop()
            right = stack.pop()
            stack.append(BinaryOp(OPERATORS[word.text], left, right))
        else:
            stack.append(compile_leaf(word, lineno))

    if len(stack) == 0: raise ParseError('too few operands: empty expression', lineno)
    if len(stack) > 1:  raise ParseError('too many operands: {} values left'.format(len(stack)), lineno)
    return stack[0]


def parse_name(word, lineno=None):
    """parse_name returns the variable name of a quoted name word: "X -> X"""
    if word.kind != 'literal' or len(word.text) < 2:
        raise ParseError('expected a quoted name like "X, got {}'.format(word.text), lineno)
    return word.text[1:]


class Parser(object):
    """Parser builds command trees and registers procedures.

    Usage Example:

        parser = Parser()
        commands = parser.parse('TO STEP "LEN\\nFORWARD :LEN\\nEND\\nSTEP "10')
        parser.procedures['STEP']  # Procedure('STEP', ('LEN',), ...)

    The procedure table may be shared between several `parse` calls,
    which allows to call procedures defined by earlier scripts.
    """

    def __init__(self, procedures=None):
        self.procedures = {} if procedures is None else procedures

    def parse(self, text):
        """parse parses a whole script, all blocks must be closed"""
        commands = self.parse_block(LineCursor(text))
        log.debug('parsed %d top-level commands', len(commands))
        return commands

    def parse_block(self, cursor, opener=None):
        """parse_block parses lines until the line closing the block that
        `opener` started, or until the end of input for the top level."""
        commands = []
        for line in cursor:
            head = line.words[0].text
            if head in ('IF', 'WHILE'):
                commands.append(self.parse_conditional(line, cursor))
            elif head == 'TO':
                self.parse_procedure(line, cursor)
            elif head in (']', 'END'):
                self.close_block(line, opener)
                return tuple(commands)
            else:
                command = self.parse_command(line)
                log.debug('line %s: %s', line.lineno, command)
                commands.append(command)

        if opener is not None:
            raise ParseError('block opened on line {} is not closed by "{}"'.format(
                opener.lineno, terminator(opener)), opener.lineno)
        return tuple(commands)

    def close_block(self, line, opener):
        head = line.words[0].text
        if len(line.words) > 1:
            raise ParseError('"{}" must be the only word on its line'.format(head), line.lineno)
        if opener is None:
            raise ParseError('unexpected "{}" outside of a block'.format(head), line.lineno)
        if head != terminator(opener):
            raise ParseError('expected "{}" to close block opened on line {}, found "{}"'.format(
                terminator(opener), opener.lineno, head), line.lineno)

    def parse_conditional(self, line, cursor):
        head, words = line.words[0].text, line.words
        if words[-1].text != '[':
            raise ParseError('{} block does not start with "["'.format(head), line.lineno)
        condition = compile_expression(words[1:-1], line.lineno)
        body = self.parse_block(cursor, line)
        command = If if head == 'IF' else While
        return command(condition, body, line.lineno)

    def parse_procedure(self, line, cursor):
        words = line.words
        if len(words) < 2:
            raise ParseError('TO expects a procedure name', line.lineno)
        name = words[1].text
        if words[1].kind != 'bare' or name in RESERVED:
            raise ParseError('invalid procedure name {}'.format(name), line.lineno)
        params = [parse_name(word, line.lineno) for word in words[2:]]
        if len(set(params)) != len(params):
            raise ParseError('duplicate parameter in procedure {}'.format(name), line.lineno)

        # registered before the body is parsed to allow recursive calls
        procedure = Procedure(name, params, lineno=line.lineno)
        self.procedures[name] = procedure
        procedure.body = self.parse_block(cursor, line)
        log.debug('registered procedure %s%s', name, procedure.params)
        return procedure

    def parse_command(self, line):
        """parse_command parses a line that is not a block into a command"""
        lineno = line.lineno
        head, args = line.words[0].text, line.words[1:]

        if head in ('PENUP', 'PENDOWN'):
            if args: raise ParseError('{} takes no arguments'.format(head), lineno)
            return PenUp(lineno) if head == 'PENUP' else PenDown(lineno)

        if head in MOVES or head in SETTER_COMMANDS:
            if not args: raise ParseError('{} expects a value'.format(head), lineno)
            value = compile_expression(args, lineno)
            if head in MOVES: return Move(head, value, lineno)
            return SETTER_COMMANDS[head](value, lineno)

        if head in ('MAKE', 'ADDASSIGN'):
            if len(args) < 2: raise ParseError('{} expects a name and a value'.format(head), lineno)
            name = parse_name(args[0], lineno)
            value = compile_expression(args[1:], lineno)
            if head == 'MAKE': return Assign(name, value, lineno)
            return AddAssign(name, value, lineno)

        procedure = self.procedures.get(head)
        if procedure is not None:
            if len(args) != len(procedure.params):
                raise ParseError('{} expects {} arguments, got {}'.format(
                    head, len(procedure.params), len(args)), lineno)
            return Call(head, tuple(compile_expression([arg], lineno) for arg in args), lineno)

        raise ParseError('unknown command {}'.format(head), lineno)


def terminator(opener):
    return 'END' if opener.words[0].text == 'TO' else ']'


def parse(text, procedures=None):
    """parse parses a script and returns `(commands, procedures)`"""
    parser = Parser(procedures)
    return parser.parse(text), parser.procedures
