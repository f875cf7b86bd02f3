#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/index_file.py - Staging area
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
from enum import Enum
from typing import Dict, List

from .errors import MiniGitError
from .hash_utils import get_file_bytes, get_file_hash, write_file_bytes
from .object_files import EditableFile


class FileStatus(Enum):
    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"


def _empty_status() -> Dict[FileStatus, List[str]]:
    return {status: [] for status in FileStatus}


class IndexFile(EditableFile):
    """Maps staged paths to blob hashes, one "<path> <hash>" line per file"""

    def __init__(self, filename: str, full_path: str):
        super().__init__(filename, full_path)
        self.entries: Dict[str, str] = {}

    def get_entries(self) -> Dict[str, str]:
        return dict(self.entries)

    def load(self) -> None:
        self.entries.clear()
        for line in self.load_lines():
            if not line:
                continue
            # Hashes never contain spaces, paths may
            path, _sep, blob_hash = line.rpartition(" ")
            self.entries[path] = blob_hash

    def save(self) -> None:
        self.save_lines(f"{path} {self.entries[path]}" for path in sorted(self.entries))

    def add_entry(self, path: str, blob_hash: str) -> None:
        self.entries[path] = blob_hash

    def remove_entry(self, path: str) -> bool:
        return self.entries.pop(path, None) is not None

    def remove_prefix(self, directory: str) -> int:
        """Unstages every path below *directory*; returns how many were removed"""
        prefix = directory.rstrip("/") + "/"
        removed = [path for path in self.entries if path.startswith(prefix)]
        for path in removed:
            del self.entries[path]
        return len(removed)

    def set_entries(self, new_entries: Dict[str, str]) -> None:
        self.entries.clear()
        self.entries.update(new_entries)

    def save_tracked_files_to_working_dir(self, working_dir: str, blobs_dir: str) -> None:
        for path, blob_hash in self.entries.items():
            data = get_file_bytes(os.path.join(blobs_dir, blob_hash))
            write_file_bytes(os.path.join(working_dir, path), data)

    def get_untracked_files(self, working_dir: str, exclude: str) -> Dict[FileStatus, List[str]]:
        """Compares the working directory against the index"""
        working_dir_files = self.get_files_from_working_directory(working_dir, exclude)
        result = _empty_status()

        for path in sorted(set(self.entries) | working_dir_files):
            in_index = path in self.entries
            in_working_dir = path in working_dir_files

            if in_index and in_working_dir:
                if self.entries[path] != get_file_hash(os.path.join(working_dir, path)):
                    result[FileStatus.MODIFIED].append(path)
            elif in_working_dir:
                result[FileStatus.NEW].append(path)
            else:
                result[FileStatus.DELETED].append(path)

        return result

    def get_ready_to_commit_files(self, repo_entries: Dict[str, str]) -> Dict[FileStatus, List[str]]:
        """Compares the index against the blobs of the current commit"""
        result = _empty_status()

        for path in sorted(set(self.entries) | set(repo_entries)):
            in_index = path in self.entries
            in_repo = path in repo_entries

            if in_index and in_repo:
                if self.entries[path] != repo_entries[path]:
                    result[FileStatus.MODIFIED].append(path)
            elif in_index:
                result[FileStatus.NEW].append(path)
            else:
                result[FileStatus.DELETED].append(path)

        return result

    @staticmethod
    def get_files_from_working_directory(working_dir: str, exclude: str) -> set:
        """Relative '/'-separated paths of every file, skipping *exclude*"""
        result = set()
        exclude = os.path.abspath(exclude)

        try:
            for root, dirs, files in os.walk(working_dir, onerror=_raise_walk_error):
                dirs[:] = [d for d in dirs if os.path.abspath(os.path.join(root, d)) != exclude]
                for name in files:
                    full_path = os.path.join(root, name)
                    relative = os.path.relpath(full_path, working_dir)
                    result.add(relative.replace(os.sep, "/"))
        except OSError as e:
            raise MiniGitError.from_os_error(e)

        return result


def _raise_walk_error(error: OSError) -> None:
    raise error


def has_changes(status: Dict[FileStatus, List[str]]) -> bool:
    return any(status.values())
