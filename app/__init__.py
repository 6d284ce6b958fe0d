# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Application wiring: bootstrap (config and logging) and the Discord bot runtime."""
