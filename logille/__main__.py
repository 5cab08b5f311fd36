# -*- coding: utf-8 -*-

# (C) 2018 Uwe Jugel, @ubunatic
# License: GNU AGPLv3+ (see LICENSE file or http://www.gnu.org/licenses)

from logille.cli import main

main()
