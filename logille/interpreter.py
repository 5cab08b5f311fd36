# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""
This module runs parsed logo commands against a turtle and a drawing surface.

Variables live in exactly two places: the global scope and, while a procedure
runs, the procedure's own scope. The procedure scope starts out holding only
the procedure's parameters; there is no lookup through to the caller or to the
globals. `ADDASSIGN` is the exception: it always reads and writes the global
scope, even inside a procedure.

Commands are walked with an explicit stack of activations instead of Python
recursion, so recursive scripts are limited by `max_depth` only.
"""

import logging, math

from logille.canvas import COLORS
from logille.errors import ExecutionError
from logille.parser import Parser
from logille.turtle import TurtleState, project_endpoint
from logille.syntax import (
    EPSILON, MOVES, f32, format_value,
    Literal, Variable, Query,
    PenUp, PenDown, Move, SetPenColor, Turn, SetHeading, SetX, SetY,
    Assign, AddAssign, If, While, Call,
)

log = logging.getLogger(__name__)

DEFAULT_WIDTH  = 160
DEFAULT_HEIGHT = 160
MAX_DEPTH      = 10000


def number(value):
    if type(value) is not float:
        raise ExecutionError('expected a number, got {}'.format(format_value(value)))
    return value

def boolean(value):
    if type(value) is not bool:
        raise ExecutionError('expected a boolean, got {}'.format(format_value(value)))
    return value

def integer(value, what):
    value = number(value)
    if not math.isfinite(value) or value != int(value):
        raise ExecutionError('{} must be a whole number, got {}'.format(what, format_value(value)))
    return int(value)

def finite(value):
    """finite rounds a computed number to float32, it must stay in range"""
    value = f32(value)
    if not math.isfinite(value):
        raise ExecutionError('number out of range')
    return value

def divide(left, right):
    if number(right) == 0:
        raise ExecutionError('division by zero')
    return finite(number(left) / right)

def equal(left, right):
    if type(left) is bool and type(right) is bool:
        return left == right
    if type(left) is float and type(right) is float:
        return abs(left - right) < EPSILON
    raise ExecutionError('cannot compare {} with {}'.format(format_value(left), format_value(right)))


BINARY = {
    'add': lambda a, b: finite(number(a) + number(b)),
    'sub': lambda a, b: finite(number(a) - number(b)),
    'mul': lambda a, b: finite(number(a) * number(b)),
    'div': divide,
    'eq':  equal,
    'ne':  lambda a, b: not equal(a, b),
    'lt':  lambda a, b: number(a) < number(b),
    'gt':  lambda a, b: number(a) > number(b),
    'and': lambda a, b: boolean(a) & boolean(b),
    'or':  lambda a, b: boolean(a) | boolean(b),
}


class Scope(object):
    """Scope maps variable names to values."""

    def __init__(self, name='global', bindings=None):
        self.name = name
        self.bindings = dict(bindings or {})

    def get(self, name):
        try:
            return self.bindings[name]
        except KeyError:
            raise ExecutionError('variable not defined: :{}'.format(name)) from None

    def set(self, name, value):
        self.bindings[name] = value

    def __contains__(self, name): return name in self.bindings

    def __repr__(self):
        return 'Scope({!r}, {!r})'.format(self.name, self.bindings)


class Activation(object):
    """A command sequence being walked in a scope. Loop activations re-check
    the condition of their `While` command each time the body is done."""
    __slots__ = ('commands', 'position', 'scope', 'loop')

    def __init__(self, commands, scope, loop=None):
        self.commands = commands
        self.position = 0
        self.scope = scope
        self.loop = loop


class Interpreter(object):
    """Interpreter parses and runs logo scripts.
    Usage Example:

        canvas = TurtleCanvas()
        logo = Interpreter(canvas, width=100, height=100)
        logo.run('PENDOWN\\nFORWARD "20')
        print(canvas.frame())

    Procedures, global variables and the turtle survive between runs,
    `reset` restores the turtle and the globals.
    """

    def __init__(self, surface, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT, max_depth=MAX_DEPTH):
        self.surface = surface
        self.width = width
        self.height = height
        self.max_depth = max_depth
        self.procedures = {}
        self.handlers = {
            PenUp:       self.pen_up,
            PenDown:     self.pen_down,
            Move:        self.move,
            SetPenColor: self.set_pen_color,
            Turn:        self.turn,
            SetHeading:  self.set_heading,
            SetX:        self.set_x,
            SetY:        self.set_y,
            Assign:      self.assign,
            AddAssign:   self.add_assign,
            If:          self.run_if,
            While:       self.run_while,
            Call:        self.call,
        }
        self.reset()

    def reset(self):
        self.globals = Scope('global')
        self.turtle = TurtleState.centered(self.width, self.height)

    def parse(self, text):
        """parse parses a script, new procedures are only kept if the whole script parses"""
        parser = Parser(dict(self.procedures))
        commands = parser.parse(text)
        self.procedures = parser.procedures
        return commands

    def run(self, text):
        """run parses and executes a script, returns the parsed commands"""
        commands = self.parse(text)
        self.execute(commands)
        return commands

    def execute(self, commands):
        """execute runs commands in the global scope"""
        stack = [Activation(commands, self.globals)]
        while stack:
            top = stack[-1]
            if top.position < len(top.commands):
                command = top.commands[top.position]
                top.position += 1
            elif top.loop is not None:
                command = top.loop
                stack.pop()
            else:
                stack.pop()
                continue

            try:
                log.debug('line %s: %s', command.lineno, type(command).__name__)
                child = self.handlers[type(command)](command, top.scope)
                if child is None: continue
                if len(stack) >= self.max_depth:
                    raise ExecutionError('maximum recursion depth exceeded ({})'.format(self.max_depth))
                stack.append(child)
            except ExecutionError as err:
                if err.lineno is None: err.lineno = command.lineno
                raise

    def evaluate(self, expression, scope):
        """evaluate computes the value of an expression, variables are read
        from `scope` only"""
        kind = type(expression)
        if kind is Literal:  return expression.value
        if kind is Variable: return scope.get(expression.name)
        if kind is Query:    return self.query(expression.kind)
        left = self.evaluate(expression.left, scope)
        right = self.evaluate(expression.right, scope)
        return BINARY[expression.op](left, right)

    def query(self, kind):
        turtle = self.turtle
        if kind == 'XCOR':    return turtle.x
        if kind == 'YCOR':    return turtle.y
        if kind == 'HEADING': return finite(float(turtle.heading))
        if kind == 'COLOR':   return float(turtle.color)
        raise ExecutionError('unknown query {}'.format(kind))

    def test(self, condition, scope):
        return boolean(self.evaluate(condition, scope))

    # command handlers, a handler may return an Activation to run next

    def pen_up(self, command, scope):   self.turtle.pen_down = False
    def pen_down(self, command, scope): self.turtle.pen_down = True

    def move(self, command, scope):
        turtle = self.turtle
        length = number(self.evaluate(command.distance, scope))
        direction = turtle.heading + MOVES[command.direction]
        x, y = project_endpoint(turtle.x, turtle.y, direction, length)
        x, y = finite(x), finite(y)
        if turtle.pen_down:
            x, y = self.surface.draw_segment(turtle.x, turtle.y, direction, length, COLORS[turtle.color])
        turtle.x, turtle.y = f32(x), f32(y)

    def set_pen_color(self, command, scope):
        index = integer(self.evaluate(command.value, scope), 'pen color')
        if not 0 <= index < len(COLORS):
            raise ExecutionError('pen color {} is not in the palette 0-{}'.format(index, len(COLORS) - 1))
        self.turtle.color = index

    def turn(self, command, scope):
        self.turtle.heading += integer(self.evaluate(command.value, scope), 'turn')

    def set_heading(self, command, scope):
        self.turtle.heading = integer(self.evaluate(command.value, scope), 'heading')

    def set_x(self, command, scope):
        self.turtle.x = number(self.evaluate(command.value, scope))

    def set_y(self, command, scope):
        self.turtle.y = number(self.evaluate(command.value, scope))

    def assign(self, command, scope):
        scope.set(command.name, self.evaluate(command.value, scope))

    def add_assign(self, command, scope):
        total = number(self.globals.get(command.name))
        value = number(self.evaluate(command.value, scope))
        self.globals.set(command.name, finite(total + value))

    def run_if(self, command, scope):
        if self.test(command.condition, scope):
            return Activation(command.body, scope)

    def run_while(self, command, scope):
        if self.test(command.condition, scope):
            return Activation(command.body, scope, loop=command)

    def call(self, command, scope):
        procedure = self.procedures.get(command.name)
        if procedure is None:
            raise ExecutionError('procedure not found: {}'.format(command.name))
        if len(procedure.params) != len(command.args):
            raise ExecutionError('{} expects {} arguments, got {}'.format(
                procedure.name, len(procedure.params), len(command.args)))

        values = [self.evaluate(arg, scope) for arg in command.args]
        local = Scope(procedure.name, zip(procedure.params, values))
        log.debug('calling %s %s', procedure.name, local.bindings)
        return Activation(procedure.body, local)
