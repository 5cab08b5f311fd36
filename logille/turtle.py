# -*- coding: utf-8 -*-

# (C) 2014- by Adam Tauber, <asciimoo@gmail.com>
# License: GNU AGPL (see LICENSE file or http://www.gnu.org/licenses)

import math
from logille.canvas import Canvas, line
from logille.syntax import f32

DEFAULT_COLOR = 7


def project_endpoint(x, y, direction, length):
    """Compute where a segment ends without drawing it.

    :param x: x coordinate of the startpoint
    :param y: y coordinate of the startpoint
    :param direction: Integer. Degrees, 0 points up and 90 points right.
    :param length: Float. Length of the segment.
    """
    radians = math.radians(direction)
    return (f32(x + length * math.sin(radians)),
            f32(y - length * math.cos(radians)))


class TurtleState(object):
    """Position, heading and pen of the turtle
    http://en.wikipedia.org/wiki/Turtle_graphics

    The heading is kept in whole degrees and is never wrapped around.
    """

    def __init__(self, x=0.0, y=0.0, heading=0, color=DEFAULT_COLOR, pen_down=False):
        self.x = f32(float(x))
        self.y = f32(float(y))
        self.heading = heading
        self.color = color
        self.pen_down = pen_down

    @classmethod
    def centered(cls, width, height):
        """Turtle in the middle of a width x height surface, heading up, pen up."""
        return cls(width // 2, height // 2)

    def __repr__(self):
        return 'TurtleState(x={}, y={}, heading={}, color={}, pen_down={})'.format(
            self.x, self.y, self.heading, self.color, self.pen_down)


class DrawingSurface(object):
    """DrawingSurface is what the interpreter draws on.
    Subclasses implement `draw_segment`."""

    def draw_segment(self, x, y, direction, length, color):
        """Draw a segment and return its endpoint.

        :param x: x coordinate of the startpoint
        :param y: y coordinate of the startpoint
        :param direction: Integer. Absolute direction in degrees.
        :param length: Float. Length of the segment.
        :param color: :class:`logille.canvas.Color` of the pen
        """
        raise NotImplementedError('{} cannot draw'.format(type(self).__name__))


class TurtleCanvas(Canvas, DrawingSurface):
    """TurtleCanvas draws turtle segments with braille dots."""

    def draw_segment(self, x, y, direction, length, color):
        end_x, end_y = project_endpoint(x, y, direction, length)
        for lx, ly in line(x, y, end_x, end_y):
            self.set(lx, ly, color)
        return end_x, end_y
