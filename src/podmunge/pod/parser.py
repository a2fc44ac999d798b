#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/pod/parser.py
"""Pod text to paragraph nodes.

The reader splits Pod text into lines and groups them:
    - each run of whitespace-only lines becomes one ``Blank``
    - a run of non-blank lines starting with ``=word`` becomes a ``Command``
    - any other run of non-blank lines becomes a ``Text``
    - after ``=cut``, every line up to the next ``=word`` line is ``Nonpod``

Joining ``as_pod_string()`` of the children gives back the input text, except
that whitespace after a command name is normalized to one space.

"""

from __future__ import annotations

import logging
import re

from podmunge.pod.nodes import Blank, Command, Nonpod, PodDocument, PodNode, Text

logger = logging.getLogger(__name__)

_COMMAND = re.compile(r"\A=([a-zA-Z]\S*)(?:[^\S\n]+|(?=\n)|\Z)", re.DOTALL)
_BLANK_LINE = re.compile(r"\A[^\S\n]*\n?\Z")


class PodParser:
    """Read Pod text into a ``PodDocument``.

    Examples
    --------
    >>> doc = PodParser().parse("=head1 NAME\\n\\nHello\\n")
    >>> [type(node).__name__ for node in doc.children]
    ['Command', 'Blank', 'Text']

    """

    def parse(self, text: str) -> PodDocument:
        """Parse Pod text.

        Parameters
        ----------
        text : str
            Pod text, possibly several blocks joined together

        Returns
        -------
        PodDocument
            Document with one child per paragraph or blank line

        """
        children: list[PodNode] = []
        paragraph: list[str] = []
        nonpod: list[str] = []
        in_pod = True

        def flush_paragraph() -> None:
            if paragraph:
                children.append(self._make_paragraph("".join(paragraph)))
                paragraph.clear()

        for line in text.splitlines(keepends=True):
            if not in_pod:
                if _COMMAND.match(line):
                    children.append(Nonpod("".join(nonpod)))
                    nonpod.clear()
                    in_pod = True
                else:
                    nonpod.append(line)
                    continue

            if _BLANK_LINE.match(line):
                flush_paragraph()
                if children and isinstance(children[-1], Blank):
                    children[-1].content += line
                else:
                    children.append(Blank(line))
                continue

            if self._command_name(line) == "cut":
                flush_paragraph()
                children.append(self._make_paragraph(line))
                in_pod = False
                continue

            paragraph.append(line)

        flush_paragraph()
        if nonpod:
            children.append(Nonpod("".join(nonpod)))

        logger.debug(f"Read {len(children)} Pod node(s)")
        return PodDocument(children=children)

    @staticmethod
    def _command_name(line: str) -> str | None:
        match = _COMMAND.match(line)
        return match.group(1) if match else None

    @staticmethod
    def _make_paragraph(text: str) -> PodNode:
        match = _COMMAND.match(text)
        if match is None:
            return Text(text)
        return Command(command=match.group(1), content=text[match.end() :])


def read_string(text: str) -> PodDocument:
    """Parse Pod text into a ``PodDocument``."""
    return PodParser().parse(text)


parse_documentation = read_string
