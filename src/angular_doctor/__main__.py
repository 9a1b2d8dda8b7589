# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Entry point for ``python -m angular_doctor``."""

from __future__ import annotations

from .cli.app import main

if __name__ == "__main__":
    main()
