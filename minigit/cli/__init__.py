#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/__init__.py - Terminal interface package
#
