#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the podmunge library.

This module centralizes the marker literals, patterns and defaults used
across the tokenizer, the extraction pipeline and the reassembler.

Constants are organized by category:
1. Type Definitions - Literal types for configuration values
2. Perl Markers - Section sentinels recognized by the tokenizer
3. Pod Markers - Patterns describing embedded documentation
4. Munging Defaults - Default option values
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ReplacerName = Literal["nothing", "comment", "blank"]
REPLACER_NAMES: tuple[ReplacerName, ...] = ("nothing", "comment", "blank")

# =============================================================================
# Perl Markers
# =============================================================================

END_MARKER = "__END__"
DATA_MARKER = "__DATA__"

# A bare end section: the sentinel followed by nothing but whitespace
BARE_END_PATTERN = re.compile(r"^__END__\s*\Z")

# =============================================================================
# Pod Markers
# =============================================================================

# Start of a Pod block at the beginning of a line
POD_START_PATTERN = re.compile(r"=[a-zA-Z]")

# A Pod-looking line inside a string literal
POD_IN_LITERAL_PATTERN = re.compile(r"^=[a-z]", re.MULTILINE)

POD_CUT_PATTERN = re.compile(r"^=cut\b.*(?:\n|\Z)", re.MULTILINE)

# Trailing newline plus any whitespace after it
TRAILING_BLANK_PATTERN = re.compile(r"\n\s*\Z")

# =============================================================================
# Munging Defaults
# =============================================================================

DEFAULT_REPLACER: ReplacerName = "nothing"
DEFAULT_ENCODING = "utf-8"
DEFAULT_COMMENT_MARKER = "#pod"
DEFAULT_DISPLAY_NAME = "input"
