#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/settings.py - User settings management
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import getpass
import json
import os

from .config import CONFIG_DIR, CONFIG_FILE_NAME, CONFLICT_STRATEGIES
from .errors import MiniGitError
from .translation_utils import _


class Settings:
    """Manages user settings with persistent storage"""

    def __init__(self, config_dir: str = None):
        # Config path: ~/.config/minigit/config.json
        self.config_dir = os.path.expanduser(config_dir or CONFIG_DIR)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self.settings = self.load()

    def load(self):
        """Load settings from file or return defaults"""
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    saved = json.load(f)
            except (OSError, ValueError) as e:
                raise MiniGitError(
                    _("Cannot read settings file {0}: {1}").format(self.config_file, e)
                ) from e

            # Merge with defaults to ensure new keys exist
            defaults = self.get_defaults()
            if isinstance(saved, dict):
                defaults.update(saved)
            return defaults

        return self.get_defaults()

    def get_defaults(self):
        """Return default settings"""
        return {
            # Name written into commits (empty = login name)
            "author_name": "",

            # Merge conflict resolution: markers | ours | theirs
            "conflict_strategy": "markers",

            # Colored console output
            "use_colors": True,

            # Append console messages to .mini-git/logs/minigit.log
            "log_to_file": True,
        }

    def save(self):
        """Save settings to file"""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            raise MiniGitError.from_os_error(e)

    def get(self, key, default=None):
        """Get setting value"""
        return self.settings.get(key, default)

    def set(self, key, value):
        """Set setting value and save"""
        self.settings[key] = value
        self.save()

    def set_from_string(self, key: str, raw_value: str):
        """Validate a value typed on the command line, then store it"""
        defaults = self.get_defaults()
        if key not in defaults:
            raise MiniGitError(_("Unknown setting: '{0}'").format(key))

        if isinstance(defaults[key], bool):
            lowered = raw_value.strip().lower()
            if lowered in ("true", "yes", "on", "1"):
                value = True
            elif lowered in ("false", "no", "off", "0"):
                value = False
            else:
                raise MiniGitError(
                    _("Setting '{0}' expects true or false, but got: '{1}'").format(key, raw_value)
                )
        else:
            value = raw_value

        if key == "conflict_strategy" and value not in CONFLICT_STRATEGIES:
            raise MiniGitError(
                _("Setting '{0}' must be one of: {1}").format(key, ", ".join(CONFLICT_STRATEGIES))
            )

        self.set(key, value)
        return value

    def reset(self):
        """Reset to defaults"""
        self.settings = self.get_defaults()
        self.save()

    def get_author(self) -> str:
        """Configured author name, falling back to the login name"""
        author = (self.get("author_name") or "").strip()
        if author:
            return author
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return "unknown"

    def get_conflict_strategy(self) -> str:
        strategy = self.get("conflict_strategy", "markers")
        return strategy if strategy in CONFLICT_STRATEGIES else "markers"
