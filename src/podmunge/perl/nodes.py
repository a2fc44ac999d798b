#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/perl/nodes.py
"""Token tree classes for Perl source documents.

The tokenizer turns Perl source into an ordered tree of nodes. Leaves are
``Token`` instances carrying the exact source text; composite nodes group
tokens into statements, braced blocks and the trailing ``__END__`` /
``__DATA__`` sections.

Node Hierarchy
--------------
    - Token (leaf; kind is a TokenKind)
    - Container (ordered children)
        - PerlDocument (root)
        - Statement
        - Block
        - EndSection
        - DataSection

Serializing a freshly tokenized tree reproduces the input text exactly.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Union

from podmunge.exceptions import InsertionError


class TokenKind(str, Enum):
    """Kinds of leaf tokens produced by the tokenizer."""

    CODE = "code"
    LITERAL = "literal"
    POD = "pod"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    SEPARATOR = "separator"
    END = "end"
    DATA = "data"


# Kinds that never count as code when locating the last line of code
NON_CODE_KINDS = frozenset(
    {
        TokenKind.POD,
        TokenKind.COMMENT,
        TokenKind.WHITESPACE,
        TokenKind.SEPARATOR,
        TokenKind.END,
        TokenKind.DATA,
    }
)


@dataclass(eq=False)
class Token:
    """A leaf node holding a verbatim slice of the source.

    Parameters
    ----------
    kind : TokenKind
        What the text is (code, literal, pod, ...)
    content : str
        The exact source text of the token
    line : int, default = 0
        One-based line number of the first character, 0 when synthesized

    """

    kind: TokenKind
    content: str
    line: int = 0

    @property
    def is_code(self) -> bool:
        """Whether this token carries code."""
        return self.kind not in NON_CODE_KINDS

    @property
    def line_count(self) -> int:
        """Number of lines in the content, ignoring trailing empty lines."""
        return len(self.content.rstrip("\n").split("\n")) if self.content.strip("\n") else 0

    def serialize(self) -> str:
        """Return the token's source text."""
        return self.content

    def __str__(self) -> str:
        return self.content


@dataclass(eq=False)
class Container:
    """Base class for nodes that own an ordered list of children."""

    children: list[Node] = field(default_factory=list)

    @property
    def line(self) -> int:
        """Line number of the first child, or 0 for an empty container."""
        return self.children[0].line if self.children else 0

    def append(self, node: Node) -> None:
        """Append a child node."""
        self.children.append(node)

    def tokens(self) -> Iterator[Token]:
        """Yield every leaf token in document order."""
        for child in self.children:
            if isinstance(child, Token):
                yield child
            else:
                yield from child.tokens()

    def walk(self) -> Iterator[Node]:
        """Yield every descendant node, composites before their children."""
        for child in self.children:
            yield child
            if isinstance(child, Container):
                yield from child.walk()

    def serialize(self) -> str:
        """Concatenate the text of all descendant tokens."""
        return "".join(token.content for token in self.tokens())

    def __str__(self) -> str:
        return self.serialize()


@dataclass(eq=False)
class Statement(Container):
    """A run of code tokens ending at ``;`` or at the close of a compound block."""


@dataclass(eq=False)
class Block(Container):
    """A braced block, including its ``{`` and ``}`` tokens."""


@dataclass(eq=False)
class EndSection(Container):
    """The ``__END__`` sentinel and everything after it."""


@dataclass(eq=False)
class DataSection(Container):
    """The ``__DATA__`` sentinel and everything after it."""


Node = Union[Token, Container]


@dataclass(eq=False)
class PerlDocument(Container):
    """Root of a tokenized Perl document.

    Examples
    --------
    >>> from podmunge.perl import tokenize
    >>> doc = tokenize("my $x = 1;\\n")
    >>> doc.serialize()
    'my $x = 1;\\n'

    """

    def find(self, predicate: Callable[[Node], bool]) -> list[Node]:
        """Return every descendant matching ``predicate`` in document order."""
        return [node for node in self.walk() if predicate(node)]

    def find_first(self, predicate: Callable[[Node], bool]) -> Node | None:
        """Return the first descendant matching ``predicate``, if any."""
        for node in self.walk():
            if predicate(node):
                return node
        return None

    def prune(self, predicate: Callable[[Node], bool]) -> int:
        """Remove every descendant matching ``predicate``.

        Returns
        -------
        int
            Number of nodes removed

        """
        removed = 0
        containers: list[Container] = [self]
        while containers:
            container = containers.pop()
            kept = []
            for child in container.children:
                if predicate(child):
                    removed += 1
                    continue
                kept.append(child)
                if isinstance(child, Container):
                    containers.append(child)
            container.children = kept
        return removed

    def rebuild(self, edits: dict[int, list[Token]]) -> None:
        """Replace nodes by substitute token sequences.

        Each container gets a freshly built child list; nodes are never
        spliced into a list that is being iterated.

        Parameters
        ----------
        edits : dict
            Maps ``id(node)`` of a node in this tree to the tokens that take
            its place, in order. An empty list deletes the node.

        Raises
        ------
        InsertionError
            If a substitute is not a Token or a target is not in the tree

        """
        pending = dict(edits)
        for replacements in pending.values():
            for replacement in replacements:
                if not isinstance(replacement, Token):
                    raise InsertionError(
                        f"error inserting replacement: expected a Token, got {type(replacement).__name__}"
                    )

        containers: list[Container] = [self]
        while containers:
            container = containers.pop()
            rebuilt: list[Node] = []
            for child in container.children:
                substitutes = pending.pop(id(child), None)
                if substitutes is not None:
                    rebuilt.extend(substitutes)
                    continue
                rebuilt.append(child)
                if isinstance(child, Container):
                    containers.append(child)
            container.children = rebuilt

        if pending:
            raise InsertionError(f"error inserting replacement: {len(pending)} target node(s) not found in tree")
