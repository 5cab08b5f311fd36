# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

"""Errors raised while parsing or running a logo script."""


class LogoError(Exception):
    """LogoError is the base of all script errors. It carries the message and,
    once known, the script line the error belongs to."""

    def __init__(self, message, lineno=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self):
        if self.lineno is None: return self.message
        return 'line {}: {}'.format(self.lineno, self.message)


class ParseError(LogoError):     pass
class ExecutionError(LogoError): pass
