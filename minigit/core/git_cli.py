#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/git_cli.py - Command dispatch and argument validation
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import sys
from typing import List

from .config import HEAD_SHIFT_PREFIX, MASTER_BRANCH
from .errors import MiniGitError
from .repository import MiniGit
from .translation_utils import _


class GitConstants:
    """Command names accepted by GitCli.run_command"""

    INIT = "init"
    ADD = "add"
    RM = "rm"
    STATUS = "status"
    COMMIT = "commit"
    RESET = "reset"
    LOG = "log"
    CHECKOUT = "checkout"
    BRANCH_CREATE = "branch-create"
    BRANCH_REMOVE = "branch-remove"
    SHOW_BRANCHES = "show-branches"
    MERGE = "merge"

    MASTER = MASTER_BRANCH

    ALL = [INIT, ADD, RM, STATUS, COMMIT, RESET, LOG, CHECKOUT,
           BRANCH_CREATE, BRANCH_REMOVE, SHOW_BRANCHES, MERGE]


REVISION_DESCRIPTION = "HEAD~N | branch name | commit hash"


class GitCli:
    """Runs MiniGit commands and prints their output to an output stream"""

    def __init__(self, working_dir: str, settings=None, logger=None):
        self.output_stream = sys.stdout
        self.git = MiniGit(working_dir, settings=settings, logger=logger)

    def set_output_stream(self, output_stream) -> None:
        self.output_stream = output_stream

    def get_relative_revision_from_head(self, n: int) -> str:
        """Hash of the n-th commit before HEAD"""
        return self.git.get_relative_revision_from_head(n)

    def run_command(self, command: str, arguments: List[str]) -> None:
        git = self.git

        if command == GitConstants.INIT:
            git_output = git.init()
        elif command == GitConstants.ADD:
            self._check_any_arguments(command, arguments, "files")
            git_output = git.add(arguments)
        elif command == GitConstants.RM:
            self._check_any_arguments(command, arguments, "files")
            git_output = git.rm(arguments)
        elif command == GitConstants.STATUS:
            git_output = git.status()
        elif command == GitConstants.COMMIT:
            self._check_exact_arguments(command, arguments, 1, ["message"])
            git_output = git.commit(arguments[0])
        elif command == GitConstants.RESET:
            self._check_exact_arguments(command, arguments, 1, [f"to_revision: {REVISION_DESCRIPTION}"])
            git_output = git.reset(self._parse_revision(command, arguments[0]))
        elif command == GitConstants.LOG:
            if not arguments:
                git_output = git.log()
            else:
                self._check_exact_arguments(command, arguments, 1, [f"from_revision: {REVISION_DESCRIPTION}"])
                git_output = git.log(self._parse_revision(command, arguments[0]))
        elif command == GitConstants.CHECKOUT:
            if len(arguments) > 1:
                if arguments[0] != "--":
                    raise MiniGitError(
                        _("Command '{0}' with multiple arguments expects filenames enumeration starting with '--'")
                        .format(command)
                    )
                git_output = git.checkout_files(arguments[1:])
            else:
                self._check_exact_arguments(command, arguments, 1, [f"revision: {REVISION_DESCRIPTION}"])
                git_output = git.checkout(self._parse_revision(command, arguments[0]))
        elif command == GitConstants.BRANCH_CREATE:
            self._check_exact_arguments(command, arguments, 1, ["branch"])
            git_output = git.create_branch(arguments[0])
        elif command == GitConstants.SHOW_BRANCHES:
            git_output = git.show_branches()
        elif command == GitConstants.BRANCH_REMOVE:
            self._check_exact_arguments(command, arguments, 1, ["branch"])
            git_output = git.remove_branch(arguments[0])
        elif command == GitConstants.MERGE:
            self._check_exact_arguments(command, arguments, 1, ["branch"])
            git_output = git.merge(arguments[0])
        else:
            raise MiniGitError(_("Unknown command: '{0}'").format(command))

        self.output_stream.write(git_output)
        self.output_stream.flush()

    @staticmethod
    def _check_exact_arguments(command: str, arguments: List[str], required_count: int,
                               descriptions: List[str]) -> None:
        if len(arguments) != required_count:
            described = "".join(f"[{d}]" for d in descriptions)
            raise MiniGitError(
                _("Command '{0}' must be followed by exactly {1} argument(s): {2}")
                .format(command, required_count, described)
            )

    @staticmethod
    def _check_any_arguments(command: str, arguments: List[str], description: str) -> None:
        if not arguments:
            raise MiniGitError(
                _("Command '{0}' must be followed by at least 1 argument(s): [{1}]").format(command, description)
            )

    @staticmethod
    def _parse_revision(command: str, revision: str):
        """Returns N for "HEAD~N", the revision itself otherwise"""
        if not revision.startswith(HEAD_SHIFT_PREFIX):
            return revision

        shift = revision[len(HEAD_SHIFT_PREFIX):]
        if not (shift.isascii() and shift.isdigit()):
            raise MiniGitError(
                _("Command '{0}' accepts argument in HEAD~N format with N being non-negative integer, "
                  "but got: '{1}'").format(command, shift)
            )
        return int(shift)
