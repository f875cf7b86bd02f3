#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/merge_operations.py - Three-way branch merge
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

from collections import deque
from typing import Dict, List, Optional, Tuple

from .commit_file import CommitFile
from .config import BLOBS_DIR, COMMITS_DIR
from .errors import MiniGitError
from .hash_utils import get_file_bytes, write_file_bytes
from .translation_utils import _

CONFLICT_START = "<<<<<<< "
CONFLICT_SEPARATOR = "======="
CONFLICT_END = ">>>>>>> "


def iter_ancestors(commits_dir: str, commit_hash: str):
    """Yields *commit_hash* and its ancestors breadth-first over all parents"""
    seen = set()
    queue = deque([commit_hash] if commit_hash else [])
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        yield current
        queue.extend(CommitFile.load(commits_dir, current).get_parents())


def is_ancestor(commits_dir: str, ancestor: str, descendant: str) -> bool:
    return any(h == ancestor for h in iter_ancestors(commits_dir, descendant))


def find_merge_base(commits_dir: str, ours: str, theirs: str) -> str:
    """Nearest commit of *theirs* history that is also in *ours* history"""
    our_ancestors = set(iter_ancestors(commits_dir, ours))
    for commit_hash in iter_ancestors(commits_dir, theirs):
        if commit_hash in our_ancestors:
            return commit_hash
    return ""


def three_way_merge(base: Dict[str, str], ours: Dict[str, str],
                    theirs: Dict[str, str]) -> Tuple[Dict[str, str], List[str]]:
    """
    Merges three {path: blob hash} snapshots file by file.

    Returns the merged snapshot and the sorted list of paths changed
    differently on both sides. Conflicting paths are left out of the
    merged snapshot.
    """
    merged = {}
    conflicts = []

    for path in sorted(set(base) | set(ours) | set(theirs)):
        base_hash = base.get(path)
        our_hash = ours.get(path)
        their_hash = theirs.get(path)

        if our_hash == their_hash:
            result = our_hash
        elif base_hash == our_hash:
            result = their_hash
        elif base_hash == their_hash:
            result = our_hash
        else:
            conflicts.append(path)
            continue

        if result is not None:
            merged[path] = result

    return merged, conflicts


def build_conflict_content(ours: bytes, theirs: bytes, our_label: str, their_label: str) -> bytes:
    """Whole-file conflict block with both versions"""
    def block(data: bytes) -> bytes:
        if data and not data.endswith(b"\n"):
            return data + b"\n"
        return data

    return (
        f"{CONFLICT_START}{our_label}\n".encode('utf-8')
        + block(ours)
        + f"{CONFLICT_SEPARATOR}\n".encode('utf-8')
        + block(theirs)
        + f"{CONFLICT_END}{their_label}\n".encode('utf-8')
    )


def _trace(git, message: str) -> None:
    if git.logger:
        git.logger.trace(message)


def _read_blob(git, blob_hash: Optional[str]) -> bytes:
    if blob_hash is None:
        return b""
    return get_file_bytes(git.repo_path(BLOBS_DIR, blob_hash))


def merge_branch(git, branch_name: str) -> str:
    """Merges *branch_name* into the current branch.

    Args:
        git: MiniGit instance owning the repository.
        branch_name: Branch whose history is merged in.

    Returns:
        Text shown to the user. Conflicts resolved with the "markers"
        strategy are written into the working directory and the merge is
        finished by a later commit.
    """
    head = git.head_file
    commits_dir = git.repo_path(COMMITS_DIR)

    if head.is_detached():
        raise MiniGitError(_("Cannot merge while HEAD is detached"))
    if not head.branch_exists(branch_name):
        raise MiniGitError(_("Branch '{0}' does not exist").format(branch_name))

    current_branch = head.get_current_branch()
    if current_branch == branch_name:
        raise MiniGitError(_("Cannot merge branch '{0}' into itself").format(branch_name))
    if git.is_merge_in_progress():
        raise MiniGitError(_("Merge in progress: fix conflicts, then add and commit the result"))
    if git.has_uncommitted_changes():
        raise MiniGitError(_("Commit your changes before merging"))

    ours = head.get_current_commit_hash()
    theirs = head.get_branch_commit_hash(branch_name)

    if not theirs or theirs == ours or is_ancestor(commits_dir, theirs, ours):
        return _("Already up to date") + "\n"

    our_blobs = head.load_tree(ours).get_blobs()
    their_blobs = head.load_tree(theirs).get_blobs()

    if not ours or is_ancestor(commits_dir, ours, theirs):
        head.set_current_commit(theirs)
        git.apply_tree(our_blobs, their_blobs)
        _trace(git, _("Fast-forwarded {0} to {1}").format(current_branch, theirs))
        return _("Fast-forward to '{0}'").format(branch_name) + "\n"

    base = find_merge_base(commits_dir, ours, theirs)
    base_blobs = head.load_tree(base).get_blobs() if base else {}
    merged, conflicts = three_way_merge(base_blobs, our_blobs, their_blobs)

    strategy = git.settings.get_conflict_strategy()
    if conflicts and strategy in ("ours", "theirs"):
        preferred = our_blobs if strategy == "ours" else their_blobs
        for path in conflicts:
            if path in preferred:
                merged[path] = preferred[path]
        _trace(git, _("Resolved {0} conflict(s) with strategy '{1}'").format(len(conflicts), strategy))
        conflicts = []

    if conflicts:
        # Index keeps our version of conflicting files until they are added again
        staged = dict(merged)
        for path in conflicts:
            if path in our_blobs:
                staged[path] = our_blobs[path]
        git.apply_tree(our_blobs, staged)

        for path in conflicts:
            content = build_conflict_content(
                _read_blob(git, our_blobs.get(path)),
                _read_blob(git, their_blobs.get(path)),
                current_branch,
                branch_name,
            )
            write_file_bytes(git.working_path(path), content)
        git.set_merge_head(theirs)

        lines = [_("Merge conflict in files:") + "\n"]
        lines.extend(f"\t{path}\n" for path in conflicts)
        lines.append(_("Fix conflicts, then add and commit the result") + "\n")
        return "".join(lines)

    message = _("Merge branch '{0}' into '{1}'").format(branch_name, current_branch)
    git.create_commit(merged, message, merge_parent=theirs)
    git.apply_tree(our_blobs, merged)

    return _("Merge completed successful") + "\n"
