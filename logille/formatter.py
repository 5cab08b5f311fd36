# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""Renders parsed commands and procedures back to script text."""

from logille.syntax import (
    OPERATOR_WORDS, format_value, Literal, Variable, Query, Move, Assign, AddAssign,
    If, While, Call, PenUp, PenDown, Procedure,
)

INDENT = '    '

COMMAND_WORDS = {
    'SetPenColor': 'SETPENCOLOR',
    'Turn':        'TURN',
    'SetHeading':  'SETHEADING',
    'SetX':        'SETX',
    'SetY':        'SETY',
}


def format_expression(expr):
    kind = type(expr)
    if kind is Literal:  return format_value(expr.value)
    if kind is Variable: return ':' + expr.name
    if kind is Query:    return expr.kind
    return ' '.join((OPERATOR_WORDS[expr.op], format_expression(expr.left), format_expression(expr.right)))


def format_lines(commands, depth=0):
    """format_lines yields one indented script line per command and block end"""
    pad = INDENT * depth
    for cmd in commands:
        kind = type(cmd)
        if   kind is PenUp:   yield pad + 'PENUP'
        elif kind is PenDown: yield pad + 'PENDOWN'
        elif kind is Move:    yield pad + cmd.direction + ' ' + format_expression(cmd.distance)
        elif kind in (Assign, AddAssign):
            word = 'MAKE' if kind is Assign else 'ADDASSIGN'
            yield '{}{} "{} {}'.format(pad, word, cmd.name, format_expression(cmd.value))
        elif kind in (If, While):
            word = 'IF' if kind is If else 'WHILE'
            yield '{}{} {} ['.format(pad, word, format_expression(cmd.condition))
            for text in format_lines(cmd.body, depth + 1): yield text
            yield pad + ']'
        elif kind is Call:
            yield pad + ' '.join([cmd.name] + [format_expression(arg) for arg in cmd.args])
        else:
            yield pad + COMMAND_WORDS[kind.__name__] + ' ' + format_expression(cmd.value)


def format_commands(commands):
    return '\n'.join(format_lines(commands))


def format_procedure(procedure):
    head = ' '.join(['TO', procedure.name] + ['"' + p for p in procedure.params])
    return '\n'.join([head] + list(format_lines(procedure.body, 1)) + ['END'])


def calls(commands):
    """calls yields the names of all procedures called by some commands"""
    for cmd in commands:
        kind = type(cmd)
        if kind is Call: yield cmd.name
        elif kind in (If, While):
            for name in calls(cmd.body): yield name


def format_script(procedures):
    """format_script renders a procedure table as a script that parses again.
    Procedures are written after the procedures they call. A procedure that is
    called before it can be written, which only happens for calls in a cycle,
    is declared up front with an empty body."""
    done, active, order, declared = set(), set(), [], []

    def visit(name):
        if name in done or name not in procedures: return
        active.add(name)
        for callee in calls(procedures[name].body):
            if callee in active:
                if callee != name and callee not in declared: declared.append(callee)
            else: visit(callee)
        active.discard(name)
        done.add(name)
        order.append(name)

    for name in procedures: visit(name)
    stubs = [format_procedure(Procedure(name, procedures[name].params)) for name in declared]
    return '\n\n'.join(stubs + [format_procedure(procedures[name]) for name in order])
