#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/trailing.py
"""Detach the ``__END__`` / ``__DATA__`` region from a token tree.

Whatever follows the end of code must survive munging byte for byte and is
moved to the very end of the output. A lone ``__END__`` with nothing but
whitespace after it counts as no trailing data at all, so a fresh marker can
be written in its place.
"""

from __future__ import annotations

import logging

from podmunge.constants import BARE_END_PATTERN
from podmunge.perl.nodes import DataSection, EndSection, Node, PerlDocument

logger = logging.getLogger(__name__)


def _is_section(node: Node) -> bool:
    return isinstance(node, (EndSection, DataSection))


def extract_trailing_data(tree: PerlDocument) -> str | None:
    """Remove the end-of-code sections from ``tree`` and return their text.

    Parameters
    ----------
    tree : PerlDocument
        Token tree, usually with its Pod already extracted; modified in place

    Returns
    -------
    str or None
        Verbatim text of all end/data sections, or None when there are none
        or the only one is a bare ``__END__``

    """
    sections = tree.find(_is_section)
    tree.prune(_is_section)

    if not sections:
        return None
    if len(sections) == 1 and isinstance(sections[0], EndSection) and BARE_END_PATTERN.match(sections[0].serialize()):
        logger.debug("Dropping bare __END__ marker")
        return None

    return "".join(section.serialize() for section in sections)
