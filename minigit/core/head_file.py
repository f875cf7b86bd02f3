#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/head_file.py - HEAD reference and branch pointers
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
import re

from .commit_file import CommitFile
from .errors import MiniGitError
from .hash_utils import is_object_hash
from .object_files import EditableFile
from .translation_utils import _
from .tree_node import TreeNode

_INVALID_BRANCH_CHARS = re.compile(r'[\s/\\~^:?*\[]')


def is_valid_branch_name(branch_name: str) -> bool:
    """Branch names are single file names inside branches/"""
    return bool(branch_name) and not (
        branch_name == "HEAD"
        or branch_name.startswith(("-", "."))
        or _INVALID_BRANCH_CHARS.search(branch_name)
    )


class HeadFile(EditableFile):
    """
    HEAD holds either "ref <branch>" (attached) or a bare commit hash
    (detached). Branch files hold the hash of their tip commit, or nothing
    while the branch has no commits.
    """

    def __init__(self, filename: str, full_path: str, branches_dir: str, commits_dir: str, trees_dir: str):
        super().__init__(filename, full_path)
        self.branches_dir = branches_dir
        self.commits_dir = commits_dir
        self.trees_dir = trees_dir

    def _read_head(self) -> str:
        lines = self.load_lines()
        if not lines:
            raise MiniGitError(_("HEAD file is empty"))
        return lines[0].strip()

    def is_detached(self) -> bool:
        return len(self._read_head().split(" ")) == 1

    def get_current_branch(self) -> str:
        """Returns the current branch name, or the commit hash when detached"""
        if self.is_detached():
            return self.get_current_commit_hash()
        return self._read_head().split(" ", 1)[1]

    def set_current_branch(self, branch_name: str) -> None:
        if not self.branch_exists(branch_name):
            raise MiniGitError(_("Branch '{0}' does not exist").format(branch_name))
        self.set_content_immediately(f"ref {branch_name}".encode('utf-8'))

    def get_current_commit_hash(self) -> str:
        """Returns the commit HEAD points to, empty when there are no commits yet"""
        if self.is_detached():
            return self._read_head()
        return self.get_branch_commit_hash(self.get_current_branch())

    def set_current_commit_as_detached(self, commit_hash: str) -> None:
        if not self.commit_exists(commit_hash):
            raise MiniGitError(_("Commit '{0}' does not exist").format(commit_hash))
        self.set_content_immediately(commit_hash.encode('utf-8'))

    def set_current_commit(self, commit_hash: str) -> None:
        """Moves the current branch tip, or HEAD itself when detached"""
        if not self.commit_exists(commit_hash):
            raise MiniGitError(_("Commit '{0}' does not exist").format(commit_hash))

        if self.is_detached():
            self.set_content_immediately(commit_hash.encode('utf-8'))
        else:
            self.set_branch_commit_hash(self.get_current_branch(), commit_hash)

    def get_branch_commit_hash(self, branch_name: str) -> str:
        branch_file = self._branch_file(branch_name)
        if not branch_file.exists():
            # Branch referenced by HEAD but never written
            branch_file.set_content_immediately(b"")
            return ""
        return branch_file.read_text().strip()

    def set_branch_commit_hash(self, branch_name: str, commit_hash: str) -> None:
        self._branch_file(branch_name).set_content_immediately(commit_hash.encode('utf-8'))

    def get_shifted_commit_hash(self, shift: int) -> str:
        """Walks *shift* first parents back from HEAD"""
        current_commit_hash = self.get_current_commit_hash()

        n = shift
        while n > 0 and current_commit_hash:
            commit = CommitFile.load(self.commits_dir, current_commit_hash)
            current_commit_hash = commit.parent_commit_hash
            n -= 1

        if not current_commit_hash:
            raise MiniGitError(_("No commit found associated with HEAD~{0}").format(shift))

        return current_commit_hash

    def resolve_revision(self, name: str) -> str:
        """Returns the commit hash of a branch name or commit hash.

        Branch names take precedence. An empty string is returned for a
        branch without commits.
        """
        if self.branch_exists(name):
            return self.get_branch_commit_hash(name)
        if self.commit_exists(name):
            return name
        raise MiniGitError(_("Neither commit, nor branch exists named '{0}'").format(name))

    def load_tree(self, commit_hash: str = None) -> TreeNode:
        """Loads the snapshot of *commit_hash*, HEAD's commit by default"""
        if commit_hash is None:
            commit_hash = self.get_current_commit_hash()
        if not commit_hash:
            return TreeNode.create_root()

        commit = CommitFile.load(self.commits_dir, commit_hash)
        return TreeNode.load_tree(self.trees_dir, commit.root_node_hash)

    def branch_exists(self, branch_name: str) -> bool:
        return is_valid_branch_name(branch_name) and self._branch_file(branch_name).exists()

    def commit_exists(self, commit_hash: str) -> bool:
        return is_object_hash(commit_hash) and os.path.isfile(os.path.join(self.commits_dir, commit_hash))

    def list_branches(self) -> list:
        try:
            names = os.listdir(self.branches_dir)
        except OSError as e:
            raise MiniGitError.from_os_error(e)
        return sorted(n for n in names if os.path.isfile(os.path.join(self.branches_dir, n)))

    def _branch_file(self, branch_name: str) -> EditableFile:
        return EditableFile(branch_name, os.path.join(self.branches_dir, branch_name))
