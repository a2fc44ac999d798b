#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/perl/tokenizer.py
"""Perl source to token tree converter.

This module provides a lightweight, regex-driven Perl tokenizer. It is not a
Perl parser: it only recognizes enough structure to separate code from Pod,
comments, whitespace and literals, and to find the ``__END__`` and
``__DATA__`` sections. Every character of the input ends up in exactly one
token, so serializing the resulting tree gives back the input unchanged.

Recognized constructs:
    - Pod blocks starting with ``=word`` at the beginning of a line
    - Comments, whitespace, numbers, variables, barewords, operators
    - Quotes (``'`` ``"`` `````), quote-like operators (q qq qw qx m qr s tr y)
      and ``/regex/`` in term position
    - Heredocs (``<<EOF``, ``<<"EOF"``, ``<<'EOF'``, ``<<~EOF``)
    - Statements (``;``-terminated) and braced blocks

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from podmunge.constants import DATA_MARKER, END_MARKER, POD_CUT_PATTERN, POD_START_PATTERN
from podmunge.exceptions import ParsingError
from podmunge.perl.nodes import (
    Block,
    Container,
    DataSection,
    EndSection,
    PerlDocument,
    Statement,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"[^\S\n]*\n|[^\S\n]+")
_COMMENT = re.compile(r"#[^\n]*")
_WORD = re.compile(r"[A-Za-z_]\w*(?:::\w+)*(?:::)?")
_NUMBER = re.compile(r"0[xXbB][0-9a-fA-F_]+|\d[\d_]*(?:\.(?!\.)[\d_]*)?(?:[eE][+-]?\d+)?")
_VARIABLE = re.compile(
    r"\$#?(?:\{\^?\w+\}|\^\w|(?:::)?\w+(?:::\w+)*|[^\s\w{])"
    r"|[@%](?:(?:::)?\w+(?:::\w+)*|[_\d])"
    r"|&(?:::)?[A-Za-z_]\w*(?:::\w+)*"
)
_HEREDOC = re.compile(r"<<(~?)(?:\"([^\"\n]*)\"|'([^'\n]*)'|([A-Za-z_]\w*))")
_OPERATOR = re.compile(r"<=>|\*\*=|\|\|=|&&=|//=|\.\.\.|->|=>|=~|!~|\+\+|--|\*\*|&&|\|\||//|\.\.|[<>=!+\-*/.%&|^]=|<<|>>|::|.")
_SECTION = re.compile(r"(__END__|__DATA__)(?=\s|\Z)")

_QUOTE_OPERATORS = {"q": 1, "qq": 1, "qw": 1, "qx": 1, "m": 1, "qr": 1, "s": 2, "tr": 2, "y": 2}
_PAIRS = {"(": ")", "[": "]", "{": "}", "<": ">"}

# Words after which a ``/`` starts a regex rather than a division
_REGEX_KEYWORDS = frozenset(
    {"split", "grep", "map", "if", "elsif", "unless", "while", "until", "and", "or", "not", "xor", "return", "print"}
)

# Operators that take a filehandle variable before their list
_PRINT_OPERATORS = frozenset({"print", "printf", "say"})

# Statements beginning with these words end when their block closes
_COMPOUND_KEYWORDS = frozenset(
    {
        "sub",
        "if",
        "elsif",
        "else",
        "unless",
        "while",
        "until",
        "for",
        "foreach",
        "continue",
        "package",
        "BEGIN",
        "END",
        "INIT",
        "CHECK",
        "UNITCHECK",
    }
)


@dataclass
class _Frame:
    container: Container
    statement: Statement | None = None
    depth: int = 0


@dataclass
class _Heredoc:
    terminator: str
    indented: bool
    line: int


class PerlTokenizer:
    """Convert Perl source text into a ``PerlDocument`` token tree.

    Parameters
    ----------
    text : str
        Perl source to tokenize

    Examples
    --------
    >>> doc = PerlTokenizer("print 1;\\n\\n=pod\\n\\nhi\\n\\n=cut\\n").parse()
    >>> [t.kind.value for t in doc.tokens()][-1]
    'pod'

    """

    def __init__(self, text: str):
        """Initialize the tokenizer for a single input."""
        self.text = text
        self.pos = 0
        self.line = 1
        self.document = PerlDocument()
        self._frames: list[_Frame] = [_Frame(self.document)]
        self._heredocs: list[_Heredoc] = []
        self._expect_term = True
        self._previous: Token | None = None
        self._before_previous: Token | None = None

    def parse(self) -> PerlDocument:
        """Tokenize the whole input.

        Returns
        -------
        PerlDocument
            Token tree whose serialization equals the input

        Raises
        ------
        ParsingError
            On an unterminated literal, heredoc or block, or an unmatched ``}``

        """
        text = self.text
        while self.pos < len(text):
            at_line_start = self.pos == 0 or text[self.pos - 1] == "\n"
            if at_line_start:
                if self._heredocs:
                    self._read_heredoc_bodies()
                    continue
                if POD_START_PATTERN.match(text, self.pos):
                    self._read_pod(self._frame.statement or self._frame.container)
                    continue
                if _SECTION.match(text, self.pos):
                    self._read_section()
                    break
            self._read_token()

        if self._heredocs:
            heredoc = self._heredocs[0]
            raise ParsingError(f"unterminated heredoc '{heredoc.terminator}'", line=heredoc.line)
        if len(self._frames) > 1:
            raise ParsingError("missing closing '}'", line=self._frames[-1].container.line)

        logger.debug(f"Tokenized {self.line} line(s) into {sum(1 for _ in self.document.tokens())} token(s)")
        return self.document

    @property
    def _frame(self) -> _Frame:
        return self._frames[-1]

    def _emit(self, kind: TokenKind, end: int, target: Container | None = None) -> Token:
        content = self.text[self.pos : end]
        token = Token(kind=kind, content=content, line=self.line)
        self.line += content.count("\n")
        self.pos = end
        if target is None:
            frame = self._frame
            if kind in (TokenKind.WHITESPACE, TokenKind.COMMENT):
                target = frame.statement or frame.container
            else:
                target = self._open_statement()
        target.append(token)
        return token

    def _open_statement(self) -> Statement:
        frame = self._frame
        if frame.statement is None:
            frame.statement = Statement()
            frame.container.append(frame.statement)
            frame.depth = 0
        return frame.statement

    def _significant(self, token: Token, expect_term: bool) -> None:
        self._before_previous = self._previous
        self._previous = token
        self._expect_term = expect_term

    def _read_token(self) -> None:
        text, pos = self.text, self.pos

        match = _WHITESPACE.match(text, pos)
        if match:
            self._emit(TokenKind.WHITESPACE, match.end())
            return

        char = text[pos]
        if char == "#":
            self._emit(TokenKind.COMMENT, _COMMENT.match(text, pos).end())
            return

        if char in "'\"`":
            token = self._emit(TokenKind.LITERAL, self._scan_delimited(pos))
            self._significant(token, False)
            return

        if char == "/" and self._expect_term:
            end = self._scan_delimited(pos)
            end = self._skip_modifiers(end)
            self._significant(self._emit(TokenKind.LITERAL, end), False)
            return

        if char == "<":
            match = _HEREDOC.match(text, pos)
            if match and (self._heredoc_position() or text[pos + 2 : pos + 3] in "\"'~"):
                terminator = next(group for group in match.groups()[1:] if group is not None)
                self._heredocs.append(_Heredoc(terminator, bool(match.group(1)), self.line))
                self._significant(self._emit(TokenKind.LITERAL, match.end()), False)
                return

        match = _VARIABLE.match(text, pos)
        if match and (char == "$" or self._expect_term or char == "@"):
            self._significant(self._emit(TokenKind.CODE, match.end()), False)
            return

        match = _NUMBER.match(text, pos)
        if match:
            self._significant(self._emit(TokenKind.CODE, match.end()), False)
            return

        match = _WORD.match(text, pos)
        if match:
            self._read_word(match.group(0))
            return

        if char == "{":
            self._open_block()
            return
        if char == "}":
            self._close_block()
            return

        end = _OPERATOR.match(text, pos).end()
        operator = text[pos:end]
        token = self._emit(TokenKind.CODE, end)
        frame = self._frame
        if operator in "([":
            frame.depth += 1
        elif operator in ")]":
            frame.depth = max(frame.depth - 1, 0)
        elif operator == ";" and frame.depth == 0:
            frame.statement = None
        self._significant(token, operator not in (")", "]"))

    def _read_word(self, word: str) -> None:
        end = self.pos + len(word)
        parts = _QUOTE_OPERATORS.get(word)
        previous = self._previous.content if self._previous is not None else None
        if parts and previous != "->" and not (previous == "{" and self._closes_subscript(end)):
            opener = end
            while opener < len(self.text) and self.text[opener] in " \t":
                opener += 1
            delimiter = self.text[opener : opener + 1]
            if delimiter and self._is_quote_delimiter(delimiter, opener, spaced=opener > end):
                end = self._scan_delimited(opener)
                if parts == 2:
                    if delimiter in _PAIRS:
                        second = end
                        while second < len(self.text) and self.text[second].isspace():
                            second += 1
                        end = self._scan_delimited(second)
                    else:
                        end = self._scan_delimited(end - 1)
                end = self._skip_modifiers(end)
                self._significant(self._emit(TokenKind.LITERAL, end), False)
                return

        token = self._emit(TokenKind.CODE, end)
        self._significant(token, word in _REGEX_KEYWORDS or word in _COMPOUND_KEYWORDS)

    def _closes_subscript(self, end: int) -> bool:
        """Whether the word ending at ``end`` is a bareword hash key, as in ``$h{s}``."""
        index = end
        while index < len(self.text) and self.text[index] in " \t":
            index += 1
        return self.text[index : index + 1] == "}"

    def _heredoc_position(self) -> bool:
        """Whether ``<<IDENT`` at the cursor starts a heredoc rather than a shift.

        Besides term position, that is after a bareword (``die <<EOF``,
        ``print STDERR <<EOF``) and after a filehandle variable following a
        print operator (``print $fh <<EOF``).

        """
        if self._expect_term:
            return True
        previous = self._previous
        if previous is None or previous.kind != TokenKind.CODE:
            return False
        if _WORD.fullmatch(previous.content):
            return True
        before = self._before_previous
        return (
            previous.content.startswith("$")
            and before is not None
            and before.kind == TokenKind.CODE
            and before.content in _PRINT_OPERATORS
        )

    def _is_quote_delimiter(self, delimiter: str, index: int, spaced: bool) -> bool:
        if delimiter.isalnum() or delimiter == "_" or delimiter.isspace():
            return False
        if delimiter in ",;)":
            return False
        if spaced and delimiter not in "({[</":
            return False
        if delimiter == "=" and self.text[index + 1 : index + 2] in (">", "="):
            return False
        if self._previous is not None and self._previous.content == "-":
            return False
        if delimiter == "}" and self._previous is not None and self._previous.content == "{":
            return False
        return True

    def _skip_modifiers(self, end: int) -> int:
        while end < len(self.text) and self.text[end].isalpha():
            end += 1
        return end

    def _scan_delimited(self, start: int) -> int:
        """Return the index just past the literal opened at ``start``."""
        text = self.text
        opener = text[start]
        closer = _PAIRS.get(opener, opener)
        nesting = 1
        index = start + 1
        while index < len(text):
            char = text[index]
            if char == "\\":
                index += 2
                continue
            if char == closer:
                nesting -= 1
                if nesting == 0:
                    return index + 1
            elif char == opener:
                nesting += 1
            index += 1
        raise ParsingError(f"unterminated literal starting with {opener!r}", line=self.line)

    def _open_block(self) -> None:
        statement = self._open_statement()
        block = Block()
        statement.append(block)
        token = self._emit(TokenKind.CODE, self.pos + 1, target=block)
        self._frames.append(_Frame(block))
        self._significant(token, True)

    def _close_block(self) -> None:
        if len(self._frames) == 1:
            raise ParsingError("unmatched closing '}'", line=self.line)
        frame = self._frames.pop()
        token = self._emit(TokenKind.CODE, self.pos + 1, target=frame.container)
        self._significant(token, False)

        parent = self._frame
        statement = parent.statement
        if statement is not None and parent.depth == 0 and self._is_compound(statement):
            parent.statement = None
            self._expect_term = True

    @staticmethod
    def _is_compound(statement: Statement) -> bool:
        first = statement.children[0]
        if isinstance(first, Block):
            return True
        return first.kind == TokenKind.CODE and first.content in _COMPOUND_KEYWORDS

    def _read_heredoc_bodies(self) -> None:
        text = self.text
        target = self._frame.statement or self._frame.container
        for heredoc in self._heredocs:
            index = self.pos
            while True:
                if index >= len(text):
                    raise ParsingError(f"unterminated heredoc '{heredoc.terminator}'", line=heredoc.line)
                newline = text.find("\n", index)
                line_end = len(text) if newline == -1 else newline + 1
                line = text[index:line_end].rstrip("\r\n")
                if (line.lstrip() if heredoc.indented else line) == heredoc.terminator:
                    break
                index = line_end
            self._emit(TokenKind.LITERAL, line_end, target=target)
        self._heredocs = []

    def _read_pod(self, target: Container) -> None:
        match = POD_CUT_PATTERN.search(self.text, self.pos)
        end = match.end() if match else len(self.text)
        self._emit(TokenKind.POD, end, target=target)

    def _read_section(self) -> None:
        if len(self._frames) > 1:
            raise ParsingError("missing closing '}' before end of code", line=self._frame.container.line)

        marker = _SECTION.match(self.text, self.pos).group(1)
        section: Container = EndSection() if marker == END_MARKER else DataSection()
        self.document.append(section)
        self._emit(TokenKind.SEPARATOR, self.pos + len(marker), target=section)

        if marker == DATA_MARKER:
            if self.pos < len(self.text):
                self._emit(TokenKind.DATA, len(self.text), target=section)
            return

        newline = self.text.find("\n", self.pos)
        end = len(self.text) if newline == -1 else newline + 1
        if end > self.pos:
            self._emit(TokenKind.END, end, target=section)

        # Pod is still recognized after __END__; everything else is inert text
        start = self.pos
        while self.pos < len(self.text):
            if POD_START_PATTERN.match(self.text, self.pos):
                if start < self.pos:
                    end, self.pos = self.pos, start
                    self._emit(TokenKind.END, end, target=section)
                self._read_pod(section)
                start = self.pos
                continue
            newline = self.text.find("\n", self.pos)
            self.pos = len(self.text) if newline == -1 else newline + 1
        if start < self.pos:
            end, self.pos = self.pos, start
            self._emit(TokenKind.END, end, target=section)


def tokenize(text: str) -> PerlDocument:
    """Tokenize Perl source into a token tree.

    Parameters
    ----------
    text : str
        Perl source text

    Returns
    -------
    PerlDocument
        Token tree; ``tokenize(text).serialize() == text``

    Raises
    ------
    ParsingError
        If the input is malformed

    """
    return PerlTokenizer(text).parse()
