#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/__init__.py - Core package initialization
#

"""
Core package for MiniGit.
Contains the repository engine shared by the CLI and the command dispatcher.
"""

from .errors import MiniGitError
from .git_cli import GitCli, GitConstants
from .repository import MiniGit

__all__ = ["GitCli", "GitConstants", "MiniGit", "MiniGitError"]
