# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

from logille.canvas import Canvas, line, COLORS                                   # noqa: F401
from logille.errors import LogoError, ParseError, ExecutionError                  # noqa: F401
from logille.parser import Parser, parse, compile_expression                      # noqa: F401
from logille.interpreter import Interpreter, Scope                                # noqa: F401
from logille.turtle import TurtleState, TurtleCanvas, DrawingSurface, project_endpoint  # noqa: F401
from logille.repl import Logille                                                  # noqa: F401
from logille.cli import main                                                      # noqa: F401
