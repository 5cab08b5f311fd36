# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""
Syntax tree of the logo language.

Values are plain Python objects: numbers are `float` rounded to float32
precision, booleans are `bool`. Expressions and commands are immutable
named tuples; every command remembers the script line it was parsed from.
"""

import math, re, struct
from collections import namedtuple

# float32 machine epsilon
EPSILON = 2.0 ** -23

MOVES = {'FORWARD': 0, 'BACK': 180, 'RIGHT': 90, 'LEFT': 270}
SETTERS = ('SETPENCOLOR', 'TURN', 'SETHEADING', 'SETX', 'SETY')
QUERIES = ('XCOR', 'YCOR', 'HEADING', 'COLOR')
OPERATORS = {
    '+': 'add', '-': 'sub', '*': 'mul', '/': 'div',
    'EQ': 'eq', 'NE': 'ne', 'LT': 'lt', 'GT': 'gt',
    'AND': 'and', 'OR': 'or',
}
OPERATOR_WORDS = dict((op, word) for word, op in OPERATORS.items())
KEYWORDS = (('PENUP', 'PENDOWN') + tuple(MOVES) + SETTERS +
            ('MAKE', 'ADDASSIGN', 'IF', 'WHILE', 'TO', 'END'))
RESERVED = frozenset(KEYWORDS + QUERIES + tuple(OPERATORS) + ('[', ']'))

NUMBER = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


def f32(value):
    """Round a float to the nearest float32, overflowing to infinity."""
    try:
        return struct.unpack('f', struct.pack('f', value))[0]
    except OverflowError:
        return math.copysign(float('inf'), value)


def parse_number(text):
    """Parse a numeric literal body, returns None if it is not a finite number."""
    if not NUMBER.match(text): return None
    value = f32(float(text))
    if math.isinf(value): return None
    return value


def format_number(value):
    """Shortest decimal text that reads back as the same float32."""
    if math.isinf(value) or math.isnan(value): return repr(value)
    if value == int(value) and abs(value) < 1e16: return str(int(value))
    for precision in range(1, 10):
        text = '{:.{}g}'.format(value, precision)
        if f32(float(text)) == value: return text
    return repr(value)


def format_value(value):
    if value is True:  return '"TRUE'
    if value is False: return '"FALSE'
    return '"' + format_number(value)


# expressions
Literal  = namedtuple('Literal',  'value')
Variable = namedtuple('Variable', 'name')
Query    = namedtuple('Query',    'kind')
BinaryOp = namedtuple('BinaryOp', 'op left right')

# commands
PenUp       = namedtuple('PenUp',       'lineno')
PenDown     = namedtuple('PenDown',     'lineno')
Move        = namedtuple('Move',        'direction distance lineno')
SetPenColor = namedtuple('SetPenColor', 'value lineno')
Turn        = namedtuple('Turn',        'value lineno')
SetHeading  = namedtuple('SetHeading',  'value lineno')
SetX        = namedtuple('SetX',        'value lineno')
SetY        = namedtuple('SetY',        'value lineno')
Assign      = namedtuple('Assign',      'name value lineno')
AddAssign   = namedtuple('AddAssign',   'name value lineno')
If          = namedtuple('If',          'condition body lineno')
While       = namedtuple('While',       'condition body lineno')
Call        = namedtuple('Call',        'name args lineno')

SETTER_COMMANDS = {
    'SETPENCOLOR': SetPenColor,
    'TURN':        Turn,
    'SETHEADING':  SetHeading,
    'SETX':        SetX,
    'SETY':        SetY,
}


class Procedure(object):
    """A user defined procedure: `TO name "param ... END`."""

    def __init__(self, name, params, body=(), lineno=None):
        self.name = name
        self.params = tuple(params)
        self.body = tuple(body)
        self.lineno = lineno

    def __repr__(self):
        return 'Procedure({!r}, {!r}, <{} commands>)'.format(self.name, self.params, len(self.body))
