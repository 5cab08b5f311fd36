# -*- coding: utf-8 -*-

# (C) 2014- by Adam Tauber, <asciimoo@gmail.com>
# License: GNU AGPL (see LICENSE file or http://www.gnu.org/licenses)

import os
from collections import defaultdict, namedtuple

"""
http://www.alanwood.net/unicode/braille_patterns.html

dots:
   ,___,
   |1 4|
   |2 5|
   |3 6|
   |7 8|
   `````
"""

pixel_map = ((0x01, 0x08),
             (0x02, 0x10),
             (0x04, 0x20),
             (0x40, 0x80))

# braille unicode characters starts at 0x2800
braille_char_offset = 0x2800

Color = namedtuple('Color', 'name ansi')

# pen colors, indexed by SETPENCOLOR, ansi is the 256-color terminal code
COLORS = (
    Color('black',    16),
    Color('blue',     21),
    Color('cyan',     51),
    Color('green',    46),
    Color('red',     196),
    Color('magenta', 201),
    Color('yellow',  226),
    Color('white',   231),
    Color('brown',   130),
    Color('tan',     180),
    Color('forest',   28),
    Color('aqua',     87),
    Color('salmon',  209),
    Color('purple',   93),
    Color('orange',  208),
    Color('grey',    245),
)

def iround(coord):
    T = type(coord)
    if   T is int:   return coord
    elif T is float: return int(round(coord))
    else:            raise TypeError("Unsupported coordinate type <{0}>".format(T))

def colrow(x, y):
    """Convert x, y to column, row in the braille matrix"""
    return iround(x) // 2, iround(y) // 4

def IntDict():   return defaultdict(int)

def IntDict2d(): return defaultdict(IntDict)

def paint(char, color):
    return '\x1b[38;5;{}m{}\x1b[0m'.format(color.ansi, char)


class Canvas(object):
    """Canvas implements the pixel surface."""

    def __init__(self, line_ending=os.linesep):
        super().__init__()
        self.clear()
        self.line_ending = line_ending


    def clear(self):
        """Remove all pixels from the :class:`Canvas` object."""
        self.chars = IntDict2d()
        self.colors = {}


    def set(self, x, y, color=None):
        """Set a pixel of the :class:`Canvas` object.

        :param x: x coordinate of the pixel
        :param y: y coordinate of the pixel
        :param color: (optional) :class:`Color` of the character cell
        """
        x = iround(x)
        y = iround(y)
        col, row = colrow(x, y)

        self.chars[row][col] |= pixel_map[y % 4][x % 2]
        if color is not None:
            self.colors[row, col] = color


    def get(self, x, y):
        """Get the state of a pixel. Returns bool.

        :param x: x coordinate of the pixel
        :param y: y coordinate of the pixel
        """
        x = iround(x)
        y = iround(y)
        dot_index = pixel_map[y % 4][x % 2]
        col, row = colrow(x, y)
        char = self.chars.get(row, {}).get(col)

        if not char: return False
        else:        return bool(char & dot_index)


    def color(self, x, y):
        """Get the :class:`Color` of the character cell holding a pixel, or None."""
        return self.colors.get(colrow(x, y)[::-1])


    def rows(self, min_x=None, min_y=None, max_x=None, max_y=None, colored=False):
        """Yields the current :class:`Canvas` object lines.

        :param min_x: (optional) minimum x coordinate of the canvas
        :param min_y: (optional) minimum y coordinate of the canvas
        :param max_x: (optional) maximum x coordinate of the canvas
        :param max_y: (optional) maximum y coordinate of the canvas
        :param colored: (optional) wrap cells in ANSI color escapes
        """

        if not self.chars.keys(): return

        minrow =  min_y      // 4 if min_y is not None else min(self.chars.keys())
        maxrow = (max_y - 1) // 4 if max_y is not None else max(self.chars.keys())
        mincol =  min_x      // 2 if min_x is not None else min(min(x.keys()) for x in self.chars.values())
        maxcol = (max_x - 1) // 2 if max_x is not None else max(max(x.keys()) for x in self.chars.values())

        for rownum in range(minrow, maxrow+1):
            if rownum not in self.chars: yield ''; continue

            maxcol = (max_x - 1) // 2 if max_x is not None else max(self.chars[rownum].keys())
            row = []

            for x in range(mincol, maxcol+1):
                char = self.chars[rownum].get(x)

                if not char:
                    row.append(chr(braille_char_offset))
                    continue

                char = chr(braille_char_offset+char)
                color = self.colors.get((rownum, x))
                if colored and color is not None: char = paint(char, color)
                row.append(char)

            yield ''.join(row)


    def frame(self, min_x=None, min_y=None, max_x=None, max_y=None, colored=False):
        """String representation of the current :class:`Canvas` object pixels.

        :param min_x: (optional) minimum x coordinate of the canvas
        :param min_y: (optional) minimum y coordinate of the canvas
        :param max_x: (optional) maximum x coordinate of the canvas
        :param max_y: (optional) maximum y coordinate of the canvas
        :param colored: (optional) wrap cells in ANSI color escapes
        """
        return self.line_ending.join(self.rows(min_x, min_y, max_x, max_y, colored))


def line(x1, y1, x2, y2):
    """Yields the pixel coordinates of the line between (x1, y1), (x2, y2)

    :param x1: x coordinate of the startpoint
    :param y1: y coordinate of the startpoint
    :param x2: x coordinate of the endpoint
    :param y2: y coordinate of the endpoint
    """

    x1 = iround(x1)
    y1 = iround(y1)
    x2 = iround(x2)
    y2 = iround(y2)

    xdiff = max(x1, x2) - min(x1, x2)
    ydiff = max(y1, y2) - min(y1, y2)
    xdir = 1 if x1 <= x2 else -1
    ydir = 1 if y1 <= y2 else -1

    if ydiff == 0 and xdiff == 0:
        yield (x1, y1)
        return

    r = max(xdiff, ydiff)
    dy = ydiff / float(r) * ydir
    dx = xdiff / float(r) * xdir

    for i in range(r+1):
        i = float(i)
        yield (x1 + i * dx, y1 + i * dy)
