# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""EduRAGPT study assistant: knowledge graph layout and rendering."""

__version__ = "0.1.0"
