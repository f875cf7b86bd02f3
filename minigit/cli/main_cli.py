#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/main_cli.py - Command line interface for MiniGit
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import argparse
import os
import sys

from minigit.cli.logger import RichLogger
from minigit.core.config import APP_DESC, APP_NAME, LOGS_DIR, VERSION
from minigit.core.errors import MiniGitError
from minigit.core.git_cli import GitCli, GitConstants
from minigit.core.settings import Settings
from minigit.core.translation_utils import _

CONFIG_COMMAND = "config"

# Global options that consume the following token
_OPTIONS_WITH_VALUE = ("-C", "--work-dir")
_NOCOLOR_OPTIONS = ("-n", "--nocolor")


def split_arguments(argv):
    """Splits argv into (global options, command, command arguments).

    Everything after the command belongs to the command, so "--" and
    option-like file names reach it untouched.
    """
    index = 0
    while index < len(argv):
        token = argv[index]
        if token in _OPTIONS_WITH_VALUE:
            index += 2
            continue
        if token.startswith("-") and token != "-":
            index += 1
            continue
        return argv[:index], token, list(argv[index + 1:])
    return list(argv), None, []


def wants_plain_output(global_args) -> bool:
    """True when -n/--nocolor is among the global options"""
    index = 0
    while index < len(global_args):
        if global_args[index] in _OPTIONS_WITH_VALUE:
            index += 2
            continue
        if global_args[index] in _NOCOLOR_OPTIONS:
            return True
        index += 1
    return False


class MiniGitApp:
    """Parses the command line and runs one MiniGit command"""

    def __init__(self, argv=None, settings: Settings = None, logger: RichLogger = None):
        argv = sys.argv[1:] if argv is None else list(argv)
        global_args, self.command, self.arguments = split_arguments(argv)
        self.args = self.parse_arguments(global_args)

        self.settings = settings if settings is not None else Settings()
        use_colors = self.settings.get("use_colors", True) and not self.args.nocolor
        self.logger = logger or RichLogger(use_colors=use_colors, verbose=self.args.verbose)

        self.working_dir = os.path.abspath(self.args.work_dir or os.getcwd())
        self.cli = GitCli(self.working_dir, settings=self.settings, logger=self.logger)

    def parse_arguments(self, global_args) -> argparse.Namespace:
        """Parses command line arguments with colored help"""
        no_color = wants_plain_output(global_args)

        # Custom help action that shows colored help
        class ColoredHelpAction(argparse.Action):
            def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
                super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

            def __call__(self, parser, namespace, values, option_string=None):
                from rich.box import ROUNDED
                from rich.console import Console
                from rich.panel import Panel
                from rich.table import Table
                from rich.text import Text

                console = Console(no_color=no_color)

                header = Text()
                header.append(f"{APP_NAME} ", style="bold cyan")
                header.append(f"v{VERSION}\n", style="bold white")
                header.append(f"{APP_DESC}", style="white")

                console.print(Panel(header, border_style="cyan", box=ROUNDED, padding=(0, 1), width=70))
                console.print()

                # Usage
                console.print("[bold yellow]USAGE:[/]")
                console.print("  [cyan]minigit[/] [dim]\\[OPTIONS][/] COMMAND [dim]\\[ARGS...][/]\n")

                # Commands
                console.print("[bold yellow]COMMANDS:[/]")
                commands = Table(show_header=False, box=None, padding=(0, 2))
                commands.add_column(style="green bold", no_wrap=True)
                commands.add_column(style="white")

                commands.add_row("init", _("Create an empty repository in the working directory"))
                commands.add_row("add FILES...", _("Stage files or directories"))
                commands.add_row("rm FILES...", _("Unstage files or directories"))
                commands.add_row("status", _("Show untracked and staged changes"))
                commands.add_row("commit MESSAGE", _("Record the staged snapshot"))
                commands.add_row("reset REVISION", _("Move HEAD and restore the working directory"))
                commands.add_row("log [REVISION]", _("Show commit history"))
                commands.add_row("checkout REVISION", _("Switch to a branch or detach at a commit"))
                commands.add_row("checkout -- FILES...", _("Restore files from the current commit"))
                commands.add_row("branch-create BRANCH", _("Create a branch and switch to it"))
                commands.add_row("branch-remove BRANCH", _("Delete a branch"))
                commands.add_row("show-branches", _("List branches"))
                commands.add_row("merge BRANCH", _("Merge a branch into the current one"))
                commands.add_row("config [KEY [VALUE]]", _("Show or change user settings"))
                console.print(commands)
                console.print()
                console.print("  [dim]" + _("REVISION: HEAD~N | branch name | commit hash") + "[/]\n")

                # Options
                console.print("[bold yellow]OPTIONS:[/]")
                table = Table(show_header=False, box=None, padding=(0, 2))
                table.add_column(style="green bold", no_wrap=True)
                table.add_column(style="white")

                table.add_row("-h, --help", _("Show this help message and exit"))
                table.add_row("-V, --version", _("Print application version"))
                table.add_row("-C, --work-dir DIR", _("Run as if started in DIR"))
                table.add_row("-n, --nocolor", _("Suppress color printing"))
                table.add_row("-v, --verbose", _("Show every step of an operation"))

                console.print(table)
                console.print()

                # Examples
                console.print("[bold yellow]EXAMPLES:[/]")
                examples = [
                    ("minigit init", _("Start tracking the current directory")),
                    ("minigit add src README.md", _("Stage a directory and a file")),
                    ('minigit commit "Initial commit"', _("Commit staged files")),
                    ("minigit log HEAD~1", _("History starting at the parent of HEAD")),
                    ("minigit config author_name \"Jane Doe\"", _("Set the commit author")),
                ]

                for cmd, desc in examples:
                    console.print(f"  [cyan]{cmd}[/]")
                    console.print(f"    [dim]{desc}[/]\n")

                parser.exit()

        parser = argparse.ArgumentParser(
            prog="minigit",
            description=f"{APP_NAME} v{VERSION} - {APP_DESC}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            add_help=False,  # Disable default help to use custom one
        )

        # Add custom help
        parser.add_argument("-h", "--help", action=ColoredHelpAction, help=_("Show this help message and exit"))

        parser.add_argument("-V", "--version", action="store_true", help=_("Print application version"))

        parser.add_argument("-C", "--work-dir", dest="work_dir", help=_("Run as if started in DIR"))

        parser.add_argument("-n", "--nocolor", action="store_true", help=_("Suppress color printing"))

        parser.add_argument("-v", "--verbose", action="store_true", help=_("Show every step of an operation"))

        return parser.parse_args(global_args)

    def print_version(self):
        """Prints application version"""
        print(f"{APP_NAME} v{VERSION}")

    def setup_log_file(self):
        """Enables the repository log file when configured"""
        if self.settings.get("log_to_file", True) and self.cli.git.is_initialized():
            self.logger.setup_log_file(self.cli.git.repo_path(LOGS_DIR))

    def run_config(self):
        """config: list settings, print one value or change one"""
        if not self.arguments:
            rows = [(key, str(value)) for key, value in sorted(self.settings.settings.items())]
            self.logger.display_summary(_("Settings"), rows)
            return

        key = self.arguments[0]
        if key not in self.settings.get_defaults():
            raise MiniGitError(_("Unknown setting: '{0}'").format(key))

        if len(self.arguments) == 1:
            print(self.settings.get(key))
        elif len(self.arguments) == 2:
            value = self.settings.set_from_string(key, self.arguments[1])
            self.logger.log("green", _("✓ {0} set to {1}").format(key, value))
        else:
            raise MiniGitError(
                _("Command '{0}' must be followed by at most 2 argument(s): [key][value]").format(CONFIG_COMMAND)
            )

    def run(self):
        """Runs the selected command"""
        if self.args.version:
            self.print_version()
            return

        if self.command is None:
            self.logger.die(
                "red", _("No command given. Available commands: {0}").format(", ".join(GitConstants.ALL))
            )

        try:
            if self.command == CONFIG_COMMAND:
                self.run_config()
                return

            self.setup_log_file()
            self.logger.trace(_("Command: {0}").format(" ".join([self.command] + self.arguments)))
            self.cli.run_command(self.command, self.arguments)
        except MiniGitError as e:
            self.logger.die("red", str(e))
