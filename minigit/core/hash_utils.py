#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/hash_utils.py - Hashing and file byte helpers
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import hashlib
import os
import re

from .errors import MiniGitError
from .translation_utils import _

_OBJECT_HASH = re.compile(r'[0-9a-f]{40}')


def get_hash_from_bytes(data: bytes) -> str:
    """Returns the lowercase hexadecimal SHA-1 digest of *data*"""
    return hashlib.sha1(data).hexdigest()


def is_object_hash(name: str) -> bool:
    """True when *name* has the form of an object file name"""
    return bool(name) and _OBJECT_HASH.fullmatch(name) is not None


def check_file_exists(path: str) -> None:
    """Raises MiniGitError when *path* is not an existing file"""
    if not os.path.isfile(path):
        raise MiniGitError(_("File '{0}' does not exist").format(os.path.basename(path)))


def get_file_bytes(path: str) -> bytes:
    """Reads the whole file at *path*"""
    check_file_exists(path)
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise MiniGitError.from_os_error(e)


def write_file_bytes(path: str, data: bytes) -> None:
    """Writes *data* to *path*, creating missing parent directories"""
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise MiniGitError.from_os_error(e)


def get_file_hash(path: str) -> str:
    return get_hash_from_bytes(get_file_bytes(path))
