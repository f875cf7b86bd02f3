#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# minigit/__init__.py - Package initialization
#

"""
MiniGit: a miniature file-system based version control system.
"""

__version__ = "1.0.0"
__author__ = "BigCommunity Team"
