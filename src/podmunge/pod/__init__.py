#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/pod/__init__.py
"""Pod document model.

Examples
--------
    >>> from podmunge.pod import read_string
    >>> doc = read_string("=head1 NAME\\n\\nHello\\n\\n")
    >>> doc.to_text()
    '=pod\\n\\n=head1 NAME\\n\\nHello\\n\\n=cut\\n'

"""

from podmunge.pod.nodes import Blank, Command, Nonpod, PodDocument, PodNode, Text
from podmunge.pod.parser import PodParser, parse_documentation, read_string
from podmunge.pod.transforms import PodTransformer

__all__ = [
    "Blank",
    "Command",
    "Nonpod",
    "PodDocument",
    "PodNode",
    "PodParser",
    "PodTransformer",
    "Text",
    "parse_documentation",
    "read_string",
]
