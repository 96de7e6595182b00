# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""Entry point for ``python -m eduragpt.knowledge_graph``."""

import sys

from .cli import main

sys.exit(main())
