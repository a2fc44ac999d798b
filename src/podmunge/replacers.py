#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/replacers.py
"""Replacement strategies for extracted Pod.

When a Pod token is pulled out of the Perl token tree, a replacer decides what
takes its place in the code. Three strategies are built in:

    - ``nothing``: the Pod disappears and later code moves up
    - ``comment``: each Pod line becomes a ``#pod`` comment line
    - ``blank``: the Pod becomes as many newlines as it had lines

``comment`` and ``blank`` keep the line numbers of the code after the Pod
unchanged. Strategies only build tokens; the extractor places them.

Examples
--------
    >>> from podmunge.perl import Token, TokenKind
    >>> pod = Token(TokenKind.POD, "=head1 NAME\\n\\nFoo\\n\\n=cut\\n", line=3)
    >>> replace_with_comment(pod)[0].content
    '#pod =head1 NAME\\n#pod\\n#pod Foo\\n#pod\\n#pod =cut\\n'
    >>> replace_with_blank(pod)[0].content
    '\\n\\n\\n\\n\\n'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from podmunge.constants import DEFAULT_COMMENT_MARKER, REPLACER_NAMES
from podmunge.exceptions import ValidationError
from podmunge.options import MungerOptions, ReplacerSpec
from podmunge.perl.nodes import Token, TokenKind

logger = logging.getLogger(__name__)

Replacer = Callable[[Token], list[Token]]


def replace_with_nothing(token: Token) -> list[Token]:
    """Replace Pod with nothing."""
    return []


def make_comment_replacer(marker: str = DEFAULT_COMMENT_MARKER) -> Replacer:
    """Build a replacer that comments out every Pod line with ``marker``.

    Non-empty lines get ``marker`` and a space in front; empty lines become
    the bare marker.

    """

    def replace_with_comment(token: Token) -> list[Token]:
        # Only "\n" ends a line; form feeds and lone "\r" stay inside it
        *lines, tail = token.content.split("\n")
        commented = [f"{marker} {line}" if line else marker for line in lines]
        commented.append(f"{marker} {tail}" if tail else "")
        return [Token(kind=TokenKind.COMMENT, content="\n".join(commented), line=token.line)]

    return replace_with_comment


replace_with_comment = make_comment_replacer()


def replace_with_blank(token: Token) -> list[Token]:
    """Replace Pod with one newline per line of Pod."""
    return [Token(kind=TokenKind.WHITESPACE, content="\n" * token.line_count, line=token.line)]


def get_replacer(spec: ReplacerSpec, comment_marker: str = DEFAULT_COMMENT_MARKER) -> Replacer:
    """Resolve a replacer name (or pass a callable through).

    Parameters
    ----------
    spec : str or callable
        ``"nothing"``, ``"comment"``, ``"blank"`` or a replacer callable
    comment_marker : str, default "#pod"
        Marker used by the ``comment`` strategy

    Returns
    -------
    Replacer
        Callable mapping a Pod token to its substitutes

    Raises
    ------
    ValidationError
        If ``spec`` is an unknown name

    """
    if callable(spec):
        return spec
    if spec == "nothing":
        return replace_with_nothing
    if spec == "comment":
        return make_comment_replacer(comment_marker)
    if spec == "blank":
        return replace_with_blank
    raise ValidationError(
        f"Unknown replacer '{spec}'; expected one of {', '.join(REPLACER_NAMES)}",
        parameter_name="replacer",
        parameter_value=spec,
    )


@dataclass(frozen=True)
class ReplacementPolicy:
    """The two replacement strategies in effect for one run.

    Parameters
    ----------
    normal : Replacer
        Used for Pod that appears before the last line of code
    post_code : Replacer
        Used for Pod after the last line of code, or when there is no code

    """

    normal: Replacer = replace_with_nothing
    post_code: Replacer = replace_with_nothing

    @classmethod
    def resolve(
        cls,
        replacer: ReplacerSpec = "nothing",
        post_code_replacer: ReplacerSpec | None = None,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
    ) -> ReplacementPolicy:
        """Resolve both strategies once; the post-code slot mirrors ``replacer`` when unset."""
        normal = get_replacer(replacer, comment_marker)
        post_code = normal if post_code_replacer is None else get_replacer(post_code_replacer, comment_marker)
        return cls(normal=normal, post_code=post_code)

    @classmethod
    def from_options(cls, options: MungerOptions) -> ReplacementPolicy:
        """Resolve the strategies named by ``options``."""
        return cls.resolve(options.replacer, options.post_code_replacer, options.comment_marker)

    def replacements_for(self, token: Token, before_last_code: bool) -> list[Token]:
        """Return the substitutes for a Pod token."""
        replacer = self.normal if before_last_code else self.post_code
        replacements = replacer(token)
        return list(replacements) if replacements is not None else []


def resolve_policy(
    replacer: ReplacerSpec = "nothing",
    post_code_replacer: ReplacerSpec | None = None,
    comment_marker: str = DEFAULT_COMMENT_MARKER,
) -> ReplacementPolicy:
    """Build a ``ReplacementPolicy`` from strategy names or callables.

    Examples
    --------
    >>> policy = resolve_policy("comment")
    >>> policy.post_code is policy.normal
    True

    """
    return ReplacementPolicy.resolve(replacer, post_code_replacer, comment_marker)
