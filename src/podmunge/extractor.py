#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/extractor.py
"""Pull Pod out of a Perl token tree.

The extractor walks the tree in document order with an explicit work queue,
collects the text of every Pod token, and records what replaces each one.
The tree is then rebuilt in a single pass, so nothing is removed from a list
while it is being walked.

Pod found before the last line of code is handled by the policy's normal
strategy; Pod after it (or in a file with no code) by the post-code strategy.
Pod and code are compared by line only: a Pod token sharing a line with code
is placed by tree order.

"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from podmunge.constants import DEFAULT_DISPLAY_NAME, POD_IN_LITERAL_PATTERN
from podmunge.perl.nodes import Container, Node, PerlDocument, Token, TokenKind
from podmunge.replacers import ReplacementPolicy

logger = logging.getLogger(__name__)

LogCallable = Callable[[str], None]


@dataclass(frozen=True)
class DocumentationUnit:
    """The text of one extracted Pod token.

    Parameters
    ----------
    text : str
        Verbatim Pod text, original line breaks included
    line : int
        Line the Pod started on
    after_last_code : bool
        Whether the Pod came after the last line of code

    """

    text: str
    line: int
    after_last_code: bool


@dataclass
class ExtractionResult:
    """What the extractor found in one tree."""

    units: list[DocumentationUnit] = field(default_factory=list)
    suspicious_literals: list[Token] = field(default_factory=list)

    @property
    def text(self) -> str:
        """All Pod text in original order, joined by newlines."""
        return "\n".join(unit.text for unit in self.units)


def find_last_code_line(tree: PerlDocument) -> int | None:
    """Return the highest line number of any code-bearing token, or None."""
    lines = [token.line for token in tree.tokens() if token.is_code]
    return max(lines) if lines else None


def find_pod_in_literals(tree: PerlDocument) -> list[Token]:
    """Return the literal tokens containing a line that looks like a Pod command."""
    return [
        token
        for token in tree.tokens()
        if token.kind == TokenKind.LITERAL and POD_IN_LITERAL_PATTERN.search(token.content)
    ]


class DocumentationExtractor:
    """Extract Pod tokens from a Perl token tree.

    Parameters
    ----------
    policy : ReplacementPolicy or None, default None
        Strategies deciding what replaces each Pod token
    log : callable or None, default None
        Receives the diagnostic emitted when string literals contain Pod.
        Defaults to a warning on this module's logger.
    plugin_name : str, default "DocumentationExtractor"
        Name used in the diagnostic message

    Examples
    --------
    >>> from podmunge.perl import tokenize
    >>> tree = tokenize("my $x;\\n\\n=head1 NAME\\n\\n=cut\\n")
    >>> result = DocumentationExtractor().extract(tree)
    >>> result.text
    '=head1 NAME\\n\\n=cut\\n'
    >>> tree.serialize()
    'my $x;\\n\\n'

    """

    def __init__(
        self,
        policy: ReplacementPolicy | None = None,
        log: LogCallable | None = None,
        plugin_name: str = "DocumentationExtractor",
    ):
        """Initialize the extractor with a policy and a diagnostic sink."""
        self.policy = policy or ReplacementPolicy()
        self.log: LogCallable = log or logger.warning
        self.plugin_name = plugin_name

    def extract(self, tree: PerlDocument, filename: str | None = None) -> ExtractionResult:
        """Remove every Pod token from ``tree``, replacing it per the policy.

        Parameters
        ----------
        tree : PerlDocument
            Token tree; modified in place
        filename : str or None, default None
            Display name used in diagnostics

        Returns
        -------
        ExtractionResult
            Extracted Pod in document order and any suspicious literals

        Raises
        ------
        InsertionError
            If a replacement cannot be placed in the tree

        """
        last_code_line = find_last_code_line(tree)
        result = ExtractionResult()
        edits: dict[int, list[Token]] = {}

        queue: deque[Node] = deque(tree.children)
        while queue:
            node = queue.popleft()
            if isinstance(node, Container):
                # Depth-first keeps the queue down to one level of siblings
                queue.extendleft(reversed(node.children))
                continue
            if node.kind != TokenKind.POD:
                continue

            before_last_code = last_code_line is not None and last_code_line > node.line
            result.units.append(
                DocumentationUnit(text=node.content, line=node.line, after_last_code=not before_last_code)
            )
            edits[id(node)] = self.policy.replacements_for(node, before_last_code)

        tree.rebuild(edits)
        logger.debug(f"Extracted {len(result.units)} Pod block(s); last code line is {last_code_line}")

        result.suspicious_literals = find_pod_in_literals(tree)
        if result.suspicious_literals:
            self.log(
                f"can't invoke {self.plugin_name} on {filename if filename is not None else DEFAULT_DISPLAY_NAME}: "
                "there is POD inside string literals"
            )

        return result


def extract_documentation(
    tree: PerlDocument,
    policy: ReplacementPolicy | None = None,
    filename: str | None = None,
    log: LogCallable | None = None,
    plugin_name: str = "DocumentationExtractor",
) -> ExtractionResult:
    """Extract the Pod of ``tree`` in place; see ``DocumentationExtractor.extract``."""
    return DocumentationExtractor(policy, log=log, plugin_name=plugin_name).extract(tree, filename=filename)
