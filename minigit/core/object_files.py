#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/object_files.py - Files stored inside the repository directory
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os

from .errors import MiniGitError
from .hash_utils import get_hash_from_bytes, write_file_bytes


class EditableFile:
    """A single file of the repository directory"""

    def __init__(self, filename: str, full_path: str):
        self.filename = filename
        self.full_path = full_path

    def exists(self) -> bool:
        return os.path.isfile(self.full_path)

    def read_text(self) -> str:
        try:
            with open(self.full_path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise MiniGitError.from_os_error(e)

    def load_lines(self) -> list:
        return self.read_text().splitlines()

    def save_lines(self, lines) -> None:
        content = "".join(f"{line}\n" for line in lines)
        self.set_content_immediately(content.encode('utf-8'))

    def set_content_immediately(self, content: bytes) -> None:
        write_file_bytes(self.full_path, content)

    def save_if_absent(self, content: bytes) -> bool:
        """Stores *content* only if the file does not exist yet.

        Returns ``True`` when the file was written.
        """
        if self.exists():
            return False
        self.set_content_immediately(content)
        return True


class ObjectFile(EditableFile):
    """Content-addressed file: its name is the hash of its bytes"""

    def __init__(self, directory: str, data: bytes):
        filename = get_hash_from_bytes(data)
        super().__init__(filename, os.path.join(directory, filename))
        self.data = data

    def save(self) -> bool:
        return self.save_if_absent(self.data)


class BlobFile(ObjectFile):
    """Raw content of a tracked file"""


class TreeFile(ObjectFile):
    """Listing of a directory snapshot"""
