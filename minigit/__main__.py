#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# __main__.py - Allows running the package with "python -m minigit"
#

from minigit.main import main

main()
