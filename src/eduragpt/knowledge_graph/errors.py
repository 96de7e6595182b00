# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Knowledge graph layout errors.

"""
Exceptions raised by the knowledge graph layout package.

All of them derive from ValueError since they describe bad input
(drawing area, mode flag, configuration) rather than runtime faults.
Degenerate geometry such as coincident nodes is never an error.
"""


class LayoutError(ValueError):
    """Base class for layout precondition violations."""


class InvalidBoundsError(LayoutError):
    """Drawing area width, height or scale is not finite and positive."""


class UnknownLayoutModeError(LayoutError):
    """Layout mode flag is not one of the supported modes."""


class ConfigError(LayoutError):
    """Layout configuration is malformed or out of range."""


class GraphFormatError(LayoutError):
    """Graph document is missing required node or edge fields."""
