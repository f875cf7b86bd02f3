#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/commit_file.py - Commit objects
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
from datetime import datetime
from typing import Optional

from .errors import MiniGitError
from .hash_utils import get_hash_from_bytes, is_object_hash
from .object_files import EditableFile
from .translation_utils import _


def format_commit_date(date: datetime) -> str:
    """ISO-8601 with UTC offset, second precision (2025-01-31T12:00:00+03:00)"""
    return date.replace(microsecond=0).isoformat()


class CommitFile(EditableFile):
    """
    Commit object stored as text:

        tree <root tree hash>
        parent <parent commit hash, empty for the first commit>
        merge <second parent hash>        (merge commits only)
        author <name>
        date <ISO-8601 date>
        message <message, possibly spanning several lines>
    """

    def __init__(self, commits_dir: str, root_node_hash: str, parent_commit_hash: str,
                 author: str, date: datetime, message: str,
                 merge_parent_hash: str = "", hash: Optional[str] = None):
        self.root_node_hash = root_node_hash
        self.parent_commit_hash = parent_commit_hash
        self.merge_parent_hash = merge_parent_hash
        self.author = author
        self.date = date
        self.message = message

        filename = hash or get_hash_from_bytes(self.get_content().encode('utf-8'))
        super().__init__(filename, os.path.join(commits_dir, filename))

    def get_content(self) -> str:
        lines = [
            f"tree {self.root_node_hash}",
            f"parent {self.parent_commit_hash}",
        ]
        if self.merge_parent_hash:
            lines.append(f"merge {self.merge_parent_hash}")
        lines.extend([
            f"author {self.author}",
            f"date {format_commit_date(self.date)}",
            f"message {self.message}",
        ])
        return "\n".join(lines)

    def get_parents(self) -> list:
        return [h for h in (self.parent_commit_hash, self.merge_parent_hash) if h]

    @staticmethod
    def load(commits_dir: str, hash: str) -> "CommitFile":
        commit_path = os.path.join(commits_dir, hash)
        if not is_object_hash(hash) or not os.path.isfile(commit_path):
            raise MiniGitError(_("Commit '{0}' does not exist").format(hash))

        content = EditableFile(hash, commit_path).read_text()
        header, separator, message = content.partition("\nmessage ")
        if not separator:
            raise MiniGitError(_("Commit '{0}' is corrupted").format(hash))

        fields = {}
        for line in header.splitlines():
            key, _sep, value = line.partition(" ")
            fields[key] = value

        try:
            date = datetime.fromisoformat(fields["date"])
            return CommitFile(
                commits_dir,
                root_node_hash=fields["tree"],
                parent_commit_hash=fields.get("parent", ""),
                author=fields.get("author", ""),
                date=date,
                message=message,
                merge_parent_hash=fields.get("merge", ""),
                hash=hash,
            )
        except (KeyError, ValueError):
            raise MiniGitError(_("Commit '{0}' is corrupted").format(hash))

    def save(self) -> bool:
        return self.save_if_absent(self.get_content().encode('utf-8'))

    def get_info(self) -> str:
        return (
            f"Commit {self.filename}\n"
            f"Author: {self.author}\n"
            f"Date: {format_commit_date(self.date)}\n"
            f"\n"
            f"{self.message}\n"
        )
