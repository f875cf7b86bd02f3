#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/config.py - Configuration constants for MiniGit
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

# Import translation function
from .translation_utils import _

# Repository layout
REPOSITORY_DIR = ".mini-git"   # Hidden directory inside the working directory
BLOBS_DIR = "blobs"            # File contents, named by hash
TREES_DIR = "trees"            # Directory snapshots, named by hash
COMMITS_DIR = "commits"        # Commit objects, named by hash
BRANCHES_DIR = "branches"      # One file per branch holding its tip commit
LOGS_DIR = "logs"              # Log files written by the CLI

HEAD_FILE = "HEAD"
INDEX_FILE = "INDEX"
MERGE_HEAD_FILE = "MERGE_HEAD"

# Branch settings
MASTER_BRANCH = "master"

# Relative revision prefix (HEAD~N)
HEAD_SHIFT_PREFIX = "HEAD~"

# Settings location
CONFIG_DIR = "~/.config/minigit"
CONFIG_FILE_NAME = "config.json"

# Log file name
LOG_FILE_NAME = "minigit.log"

# Valid merge conflict strategies
CONFLICT_STRATEGIES = ["markers", "ours", "theirs"]

# Script version
VERSION = "1.0.0"
APP_NAME = _("MiniGit")
APP_DESC = _("A miniature version control system: stage, commit, branch, checkout and merge files of a working directory.")
