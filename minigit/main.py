#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# main.py - Entry point for the MiniGit application
#

import sys

from rich.console import Console
from rich.markup import escape

from minigit.cli.main_cli import MiniGitApp, split_arguments, wants_plain_output
from minigit.core.errors import MiniGitError
from minigit.core.translation_utils import _


def main(argv=None):
    """Main entry point of the application"""
    argv = sys.argv[1:] if argv is None else list(argv)
    global_args, _command, _arguments = split_arguments(argv)
    console = Console(stderr=True, no_color=wants_plain_output(global_args))

    try:
        # Initialize and run the MiniGitApp
        app = MiniGitApp(argv)
        app.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]" + _("Operation cancelled by user.") + "[/]")
        sys.exit(1)
    except MiniGitError as e:
        console.print("[red]" + escape(_("ERROR") + ": " + str(e)) + "[/]")
        sys.exit(1)
    except Exception as e:
        console.print("[red]" + escape(_("Unhandled error: {0}").format(e)) + "[/]")
        sys.exit(1)


if __name__ == "__main__":
    main()
