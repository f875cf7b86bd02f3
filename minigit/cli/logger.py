#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/logger.py - Logging management for MiniGit
#

import os
import sys
from datetime import datetime

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from minigit.core.config import LOG_FILE_NAME
from minigit.core.translation_utils import _


class RichLogger:
    """Manages logs and formatted messages using the Rich library"""

    def __init__(self, use_colors: bool = True, verbose: bool = False, console: Console = None):
        self.use_colors = use_colors
        self.verbose = verbose
        self.log_file = None
        # Messages go to stderr, command output owns stdout
        self.console = console or Console(stderr=True, no_color=not use_colors, highlight=False)

    def setup_log_file(self, log_dir: str):
        """Sets up the log file"""
        os.makedirs(log_dir, exist_ok=True)
        self.log_file = os.path.join(log_dir, LOG_FILE_NAME)

    def log(self, style: str, message: str):
        """Displays formatted message and saves to log"""
        color_map = {
            "cyan": "bright_cyan",
            "blue": "blue",
            "white": "white",
            "red": "red",
            "yellow": "yellow",
            "green": "green",
            "dim": "dim",
            "bold": "bold"
        }

        rich_style = color_map.get(style, "white")

        # Display formatted message in console
        self.console.print(message, style=rich_style, markup=False)

        self._write_log_file(message)

    def trace(self, message: str):
        """Records a step of an operation; shown on the console only in verbose mode"""
        if self.verbose:
            self.console.print(message, style="dim", markup=False)
        self._write_log_file(message)

    def die(self, style: str, message: str, exit_code: int = 1):
        """Displays error message and exits the program"""
        self.log(style, f"{_('ERROR')}: {message}")
        sys.exit(exit_code)

    def display_summary(self, title: str, data: list):
        """Displays a formatted summary in a Rich table"""
        table = Table(show_header=False, box=ROUNDED, border_style="blue", padding=(0, 1))
        table.add_column(_("Field"), style="white")
        table.add_column(_("Value"), style="bright_cyan")

        for key, value in data:
            table.add_row(key, value)

        panel = Panel(
            table,
            title=title,
            box=ROUNDED,
            border_style="blue",
            padding=(1, 1),
            width=70  # Fixed width for consistency
        )

        self.console.print(panel)

    def _write_log_file(self, message: str):
        # Save to log file (without colors)
        if self.log_file:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{timestamp}] {message}\n")
