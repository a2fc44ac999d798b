#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/pod/nodes.py
"""Paragraph-level node classes for Pod documents.

A Pod document is a flat sequence of paragraphs. Each paragraph node keeps its
exact text so that an untouched document writes back out as it was read,
apart from the ``=pod`` / ``=cut`` framing added by ``PodDocument.as_pod_string``.

Node Hierarchy
--------------
    - PodDocument (root)
    - Command (``=head1 NAME``)
    - Text (ordinary or verbatim paragraph)
    - Blank (a run of blank lines)
    - Nonpod (text between ``=cut`` and the next command)

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

_LEADING_POD = re.compile(r"\A\s*=pod\b")
_TRAILING_CUT = re.compile(r"(?:\A|\n)=cut\b[^\n]*\n*\Z")
_TRAILING_BLANK_LINES = re.compile(r"(?:\n[^\S\n]*)+\Z")


class PodNode(ABC):
    """Base class for all Pod nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass

    @abstractmethod
    def as_pod_string(self) -> str:
        """Render this node as Pod text."""
        pass


@dataclass
class Command(PodNode):
    """A command paragraph such as ``=head1 NAME``.

    Parameters
    ----------
    command : str
        Command name without the leading ``=``
    content : str, default = "\\n"
        Everything after the command name and its separating whitespace,
        including the paragraph's final newline

    """

    command: str
    content: str = "\n"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this command."""
        return visitor.visit_command(self)

    def as_pod_string(self) -> str:
        """Render as ``=command content``."""
        if self.content.strip():
            return f"={self.command} {self.content}"
        return f"={self.command}{self.content}"


@dataclass
class Text(PodNode):
    """An ordinary or verbatim paragraph."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_text(self)

    def as_pod_string(self) -> str:
        """Return the paragraph text unchanged."""
        return self.content


@dataclass
class Blank(PodNode):
    """Blank lines separating paragraphs.

    ``content`` keeps every line of the run and is written back unchanged.

    """

    content: str = "\n"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this blank line."""
        return visitor.visit_blank(self)

    def as_pod_string(self) -> str:
        """Return the blank lines unchanged."""
        return self.content


@dataclass
class Nonpod(PodNode):
    """Text outside of Pod, found between ``=cut`` and the next command."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this region."""
        return visitor.visit_nonpod(self)

    def as_pod_string(self) -> str:
        """Return the text unchanged."""
        return self.content


@dataclass
class PodDocument(PodNode):
    """Root node holding the paragraphs of a Pod document.

    Parameters
    ----------
    children : list of PodNode, default = empty list
        Paragraph nodes in document order
    metadata : dict, default = empty dict
        Free-form data transforms may attach to the document

    Examples
    --------
    >>> doc = PodDocument(children=[Command("head1", "NAME\\n"), Blank(), Text("Hello\\n"), Blank()])
    >>> doc.to_text()
    '=pod\\n\\n=head1 NAME\\n\\nHello\\n\\n=cut\\n'

    """

    children: list[PodNode] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)

    def commands(self, command: str | None = None) -> list[Command]:
        """Return the command paragraphs, optionally only those named ``command``."""
        return [
            child
            for child in self.children
            if isinstance(child, Command) and (command is None or child.command == command)
        ]

    def as_pod_string(self) -> str:
        """Render the whole document framed by ``=pod`` and ``=cut``.

        The ``=pod`` header is added unless the document already opens with
        one, and the ``=cut`` footer unless it already closes with one. Blank
        lines ahead of an added ``=cut`` are reduced to one.

        """
        body = "".join(child.as_pod_string() for child in self.children)
        if not _LEADING_POD.match(body):
            body = "=pod\n\n" + body
        if not _TRAILING_CUT.search(body):
            body = _TRAILING_BLANK_LINES.sub("", body) + "\n\n=cut\n"
        return body

    def to_text(self) -> str:
        """Render the document as text; alias of ``as_pod_string``."""
        return self.as_pod_string()
