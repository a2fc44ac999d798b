#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/perl/__init__.py
"""Perl tokenizer and token tree.

Examples
--------
    >>> from podmunge.perl import tokenize, TokenKind
    >>> doc = tokenize("my $x = 1;\\n")
    >>> [t.kind for t in doc.tokens()][0] is TokenKind.CODE
    True

"""

from podmunge.perl.nodes import (
    NON_CODE_KINDS,
    Block,
    Container,
    DataSection,
    EndSection,
    Node,
    PerlDocument,
    Statement,
    Token,
    TokenKind,
)
from podmunge.perl.tokenizer import PerlTokenizer, tokenize

__all__ = [
    "NON_CODE_KINDS",
    "Block",
    "Container",
    "DataSection",
    "EndSection",
    "Node",
    "PerlDocument",
    "PerlTokenizer",
    "Statement",
    "Token",
    "TokenKind",
    "tokenize",
]
