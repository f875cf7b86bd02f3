#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/repository.py - MiniGit repository operations
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
import shutil
from datetime import datetime
from typing import Dict, List, Union

from .commit_file import CommitFile
from .config import (
    BLOBS_DIR, BRANCHES_DIR, COMMITS_DIR, HEAD_FILE, INDEX_FILE,
    MASTER_BRANCH, MERGE_HEAD_FILE, REPOSITORY_DIR, TREES_DIR,
)
from .errors import MiniGitError
from .hash_utils import get_file_bytes, write_file_bytes
from .head_file import HeadFile, is_valid_branch_name
from .index_file import FileStatus, IndexFile, has_changes
from .merge_operations import merge_branch
from .object_files import BlobFile, EditableFile
from .settings import Settings
from .translation_utils import _
from .tree_node import TreeNode

Revision = Union[str, int]


class MiniGit:
    """
    Repository stored in <working_dir>/.mini-git.

    Every public operation returns the text shown to the user and raises
    MiniGitError on failure. Revisions are either a branch name, a commit
    hash, or an int N meaning HEAD~N.
    """

    def __init__(self, working_dir: str, settings: Settings = None, logger=None):
        self.working_dir = os.path.abspath(working_dir)
        self.settings = settings if settings is not None else Settings()
        self.logger = logger

        self.head_file = HeadFile(
            HEAD_FILE,
            self.repo_path(HEAD_FILE),
            self.repo_path(BRANCHES_DIR),
            self.repo_path(COMMITS_DIR),
            self.repo_path(TREES_DIR),
        )
        self.index_file = IndexFile(INDEX_FILE, self.repo_path(INDEX_FILE))
        self.merge_head_file = EditableFile(MERGE_HEAD_FILE, self.repo_path(MERGE_HEAD_FILE))

    def _trace(self, message: str):
        if self.logger:
            self.logger.trace(message)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def init(self) -> str:
        if self.is_initialized():
            raise MiniGitError(_("MiniGit repository already initialized"))

        try:
            for directory in (BLOBS_DIR, TREES_DIR, COMMITS_DIR, BRANCHES_DIR):
                os.makedirs(self.repo_path(directory), exist_ok=True)
        except OSError as e:
            raise MiniGitError.from_os_error(e)

        self.index_file.set_content_immediately(b"")
        self.head_file.set_branch_commit_hash(MASTER_BRANCH, "")
        self.head_file.set_current_branch(MASTER_BRANCH)
        self._trace(_("Repository created in {0}").format(self.repo_path()))

        return _("Project initialized") + "\n"

    def add(self, entry_names: List[str]) -> str:
        self._check_initialized()
        self.index_file.load()

        for path, full_path in sorted(self._get_pure_files(entry_names).items()):
            blob = BlobFile(self.repo_path(BLOBS_DIR), get_file_bytes(full_path))
            if blob.save():
                self._trace(_("Stored blob {0} for {1}").format(blob.filename, path))
            self.index_file.add_entry(path, blob.filename)

        self.index_file.save()
        return _("Add completed successful") + "\n"

    def rm(self, entry_names: List[str]) -> str:
        self._check_initialized()
        self.index_file.load()

        for name in entry_names:
            path = self._relative_path(name)
            if path == ".":
                self.index_file.set_entries({})
                continue

            removed = self.index_file.remove_entry(path)
            removed = self.index_file.remove_prefix(path) > 0 or removed
            if not removed and not os.path.exists(self.working_path(path)):
                raise MiniGitError(_("Filename '{0}' is not recognized by git").format(name))
            self._trace(_("Unstaged {0}").format(path))

        self.index_file.save()
        return _("Rm completed successful") + "\n"

    def status(self) -> str:
        self._check_initialized()
        if self.head_file.is_detached():
            return _("Error while performing status: Head is detached") + "\n"

        self.index_file.load()
        untracked_files = self.index_file.get_untracked_files(self.working_dir, self.repo_path())
        ready_to_commit_files = self.index_file.get_ready_to_commit_files(
            self.head_file.load_tree().get_blobs()
        )

        content = [_("Current branch is '{0}'").format(self.head_file.get_current_branch()) + "\n"]
        if self.is_merge_in_progress():
            content.append(_("Merge in progress: fix conflicts, then add and commit the result") + "\n")

        untracked_added = self._append_status(content, untracked_files, _("Untracked files:"))
        ready_to_commit_added = self._append_status(content, ready_to_commit_files, _("Ready to commit:"))

        if not untracked_added and not ready_to_commit_added:
            content.append(_("Everything up to date") + "\n")

        return "".join(content)

    def commit(self, message: str) -> str:
        self._check_initialized()
        if not message.strip():
            raise MiniGitError(_("Commit message must not be empty"))

        self.index_file.load()
        merge_parent = self.get_merge_head()
        self.create_commit(self.index_file.get_entries(), message, merge_parent)
        self.clear_merge_head()

        return _("Files committed") + "\n"

    def reset(self, revision: Revision) -> str:
        """Moves HEAD (and its branch) to *revision*, discarding working changes"""
        self._check_initialized()
        target = self._revision_name(revision)

        if self.head_file.branch_exists(target):
            self.head_file.set_current_branch(target)
        elif self.head_file.commit_exists(target):
            self.head_file.set_current_commit(target)
        else:
            raise MiniGitError(_("Neither commit, nor branch exists named '{0}'").format(target))

        root = self.head_file.load_tree()
        self.index_file.set_entries(root.get_blobs())
        self.index_file.save()

        self._clear_working_directory()
        self.index_file.save_tracked_files_to_working_dir(self.working_dir, self.repo_path(BLOBS_DIR))
        self.clear_merge_head()
        self._trace(_("HEAD reset to {0}").format(target))

        return _("Reset successful") + "\n"

    def log(self, revision: Revision = None) -> str:
        """First-parent history starting at *revision* (HEAD by default)"""
        self._check_initialized()
        if revision is None:
            start = self.head_file.get_current_commit_hash()
        elif isinstance(revision, int):
            start = self.head_file.get_shifted_commit_hash(revision)
        else:
            start = self.head_file.resolve_revision(revision)

        result = []
        commits_dir = self.repo_path(COMMITS_DIR)
        current_commit_hash = start
        while current_commit_hash:
            commit = CommitFile.load(commits_dir, current_commit_hash)
            result.append(commit.get_info() + "\n")
            current_commit_hash = commit.parent_commit_hash

        return "".join(result)

    def checkout(self, revision: Revision) -> str:
        """Switches to a branch, or detaches HEAD at a commit"""
        self._check_initialized()
        target = self._revision_name(revision)
        prev_blobs = self.head_file.load_tree().get_blobs()

        if self.head_file.branch_exists(target):
            self.head_file.set_current_branch(target)
        elif self.head_file.commit_exists(target):
            self.head_file.set_current_commit_as_detached(target)
        else:
            raise MiniGitError(_("Neither commit, nor branch exists named '{0}'").format(target))

        self.apply_tree(prev_blobs, self.head_file.load_tree().get_blobs())
        # Leaving the branch abandons an unfinished merge
        self.clear_merge_head()
        self._trace(_("Checked out {0}").format(target))

        return _("Checkout completed successful") + "\n"

    def checkout_files(self, filenames: List[str]) -> str:
        """Restores *filenames* from the current commit"""
        self._check_initialized()
        blobs = self.head_file.load_tree().get_blobs()

        paths = [self._relative_path(name) for name in filenames]
        for name, path in zip(filenames, paths):
            if path not in blobs:
                raise MiniGitError(_("Filename '{0}' is not recognized by git").format(name))

        for path in paths:
            data = get_file_bytes(self.repo_path(BLOBS_DIR, blobs[path]))
            write_file_bytes(self.working_path(path), data)
            self._trace(_("Restored {0}").format(path))

        return _("Checkout completed successful") + "\n"

    def create_branch(self, branch_name: str) -> str:
        self._check_initialized()
        self._check_branch_name(branch_name)
        if self.head_file.branch_exists(branch_name):
            raise MiniGitError(_("Branch '{0}' already exists").format(branch_name))
        if self.is_merge_in_progress():
            raise MiniGitError(_("Merge in progress: fix conflicts, then add and commit the result"))

        self.head_file.set_branch_commit_hash(branch_name, self.head_file.get_current_commit_hash())
        # New branches are checked out right away
        self.head_file.set_current_branch(branch_name)

        return (
            _("Branch {0} created successfully").format(branch_name) + "\n"
            + _("You can checkout it with 'checkout {0}'").format(branch_name) + "\n"
        )

    def show_branches(self) -> str:
        self._check_initialized()
        content = [_("Available branches:") + "\n"]
        content.extend(f"{name}\n" for name in self.head_file.list_branches())
        return "".join(content)

    def remove_branch(self, branch_name: str) -> str:
        self._check_initialized()
        if not self.head_file.branch_exists(branch_name):
            raise MiniGitError(_("Branch '{0}' does not exist").format(branch_name))

        if not self.head_file.is_detached() and self.head_file.get_current_branch() == branch_name:
            raise MiniGitError(_("Cannot remove current branch"))

        try:
            os.remove(self.repo_path(BRANCHES_DIR, branch_name))
        except OSError as e:
            raise MiniGitError.from_os_error(e)

        return _("Branch {0} removed successfully").format(branch_name) + "\n"

    def merge(self, branch_name: str) -> str:
        self._check_initialized()
        return merge_branch(self, branch_name)

    def get_relative_revision_from_head(self, n: int) -> str:
        self._check_initialized()
        return self.head_file.get_shifted_commit_hash(n)

    # ------------------------------------------------------------------
    # Shared with merge_operations
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        return os.path.isfile(self.repo_path(HEAD_FILE))

    def create_commit(self, entries: Dict[str, str], message: str, merge_parent: str = "") -> str:
        """Stores the snapshot of *entries* and advances HEAD; returns the commit hash"""
        root = TreeNode.from_blobs(entries)
        root.save_graph(self.repo_path(TREES_DIR))

        commit = CommitFile(
            self.repo_path(COMMITS_DIR),
            root_node_hash=root.hash,
            parent_commit_hash=self.head_file.get_current_commit_hash(),
            author=self.settings.get_author(),
            date=datetime.now().astimezone(),
            message=message,
            merge_parent_hash=merge_parent,
        )
        commit.save()
        self.head_file.set_current_commit(commit.filename)
        self._trace(_("Created commit {0}").format(commit.filename))

        return commit.filename

    def apply_tree(self, prev_blobs: Dict[str, str], blobs: Dict[str, str]) -> None:
        """Makes index and working directory match *blobs*.

        Files tracked in *prev_blobs* but absent from *blobs* are deleted and
        directories left empty are pruned.
        """
        self.index_file.set_entries(blobs)
        self.index_file.save()
        self.index_file.save_tracked_files_to_working_dir(self.working_dir, self.repo_path(BLOBS_DIR))

        for path in prev_blobs:
            if path in blobs:
                continue
            full_path = self.working_path(path)
            try:
                if os.path.isfile(full_path):
                    os.remove(full_path)
                    self._trace(_("Removed {0}").format(path))
            except OSError as e:
                raise MiniGitError.from_os_error(e)

        self._remove_empty_working_directories()

    def has_uncommitted_changes(self) -> bool:
        """True when tracked files differ from the index or the index from HEAD"""
        self.index_file.load()
        untracked = self.index_file.get_untracked_files(self.working_dir, self.repo_path())
        untracked[FileStatus.NEW] = []
        ready_to_commit = self.index_file.get_ready_to_commit_files(self.head_file.load_tree().get_blobs())
        return has_changes(untracked) or has_changes(ready_to_commit)

    def is_merge_in_progress(self) -> bool:
        return self.merge_head_file.exists()

    def get_merge_head(self) -> str:
        if not self.is_merge_in_progress():
            return ""
        return self.merge_head_file.read_text().strip()

    def set_merge_head(self, commit_hash: str) -> None:
        self.merge_head_file.set_content_immediately(commit_hash.encode('utf-8'))

    def clear_merge_head(self) -> None:
        if self.is_merge_in_progress():
            try:
                os.remove(self.merge_head_file.full_path)
            except OSError as e:
                raise MiniGitError.from_os_error(e)

    def repo_path(self, *parts: str) -> str:
        return os.path.join(self.working_dir, REPOSITORY_DIR, *parts)

    def working_path(self, *parts: str) -> str:
        return os.path.join(self.working_dir, *parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_initialized(self):
        if not self.is_initialized():
            raise MiniGitError(_("MiniGit repository not initialized"))

    @staticmethod
    def _check_branch_name(branch_name: str):
        if not is_valid_branch_name(branch_name):
            raise MiniGitError(_("Invalid branch name: '{0}'").format(branch_name))

    def _revision_name(self, revision: Revision) -> str:
        if isinstance(revision, int):
            return self.head_file.get_shifted_commit_hash(revision)
        return revision

    def _relative_path(self, name: str) -> str:
        """Working-directory relative '/'-separated path of *name*"""
        full_path = os.path.normpath(os.path.join(self.working_dir, name))
        relative = os.path.relpath(full_path, self.working_dir)
        if relative == os.pardir or relative.startswith(os.pardir + os.sep):
            raise MiniGitError(_("Path '{0}' is outside the working directory").format(name))
        return relative.replace(os.sep, "/")

    def _is_repository_path(self, path: str) -> bool:
        return path.split("/", 1)[0] == REPOSITORY_DIR

    def _get_pure_files(self, entry_names: List[str]) -> Dict[str, str]:
        """Expands directories recursively into {relative path: full path}"""
        files = {}
        for name in entry_names:
            path = self._relative_path(name)
            full_path = self.working_path(path) if path != "." else self.working_dir

            if not os.path.exists(full_path):
                raise MiniGitError(_("File '{0}' does not exist").format(name))
            if self._is_repository_path(path):
                continue

            if os.path.isdir(full_path):
                found = IndexFile.get_files_from_working_directory(full_path, self.repo_path())
                for relative in found:
                    entry = relative if path == "." else f"{path}/{relative}"
                    files[entry] = self.working_path(entry)
            else:
                files[path] = full_path

        return files

    @staticmethod
    def _append_status(content: list, files: Dict[FileStatus, List[str]], title: str) -> bool:
        """Appends one status section; returns True if something was appended"""
        groups = [
            (_("New files:"), files[FileStatus.NEW]),
            (_("Modified files:"), files[FileStatus.MODIFIED]),
            (_("Removed files:"), files[FileStatus.DELETED]),
        ]
        if not any(paths for _title, paths in groups):
            return False

        content.append(f"{title}\n\n")
        for group_title, paths in groups:
            if paths:
                content.append(f"{group_title}\n")
                content.extend(f"\t{path}\n" for path in paths)
                content.append("\n")

        return True

    def _clear_working_directory(self):
        try:
            for entry in os.listdir(self.working_dir):
                if entry == REPOSITORY_DIR:
                    continue
                full_path = self.working_path(entry)
                if os.path.isdir(full_path) and not os.path.islink(full_path):
                    shutil.rmtree(full_path)
                else:
                    os.remove(full_path)
        except OSError as e:
            raise MiniGitError.from_os_error(e)

    def _remove_empty_working_directories(self):
        repo_dir = self.repo_path()
        try:
            for root, dirs, files in os.walk(self.working_dir, topdown=False):
                if root == self.working_dir or root == repo_dir or root.startswith(repo_dir + os.sep):
                    continue
                if not os.listdir(root):
                    os.rmdir(root)
        except OSError as e:
            raise MiniGitError.from_os_error(e)
