#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/errors.py - Exception raised by repository operations
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#


class MiniGitError(Exception):
    """Raised for every user-facing failure of a MiniGit operation"""

    @classmethod
    def from_os_error(cls, error: OSError) -> "MiniGitError":
        """Wrap a file system error, keeping it as the cause"""
        message = error.strerror or str(error)
        if error.filename:
            message = f"{message}: '{error.filename}'"
        wrapped = cls(message)
        wrapped.__cause__ = error
        return wrapped
