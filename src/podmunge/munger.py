#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/munger.py
"""Rewrite the Pod of a Perl document.

``PerlMunger`` is the base class for objects that take a string of Perl,
strip out all of its Pod, hand code and Pod to a transform, and put the
result back together with the Pod after an ``__END__`` marker.

Subclasses implement a single method, ``transform``, which receives a
``MungeDocument`` and must return one::

    class AddAuthor(PerlMunger):
        def transform(self, document, args):
            document.documentation.children.extend(
                [Command("head1", "AUTHOR\\n"), Blank(), Text("me\\n"), Blank()]
            )
            return document

    new_perl = AddAuthor().munge_perl_string(perl, filename="lib/Foo.pm")

The public ``munge_perl_string`` does everything around that call:

    1. check that the input round-trips through the configured encoding
    2. tokenize the Perl and extract its Pod (see ``podmunge.extractor``)
    3. read the joined Pod into a ``PodDocument``
    4. call ``transform``
    5. cut off any ``__END__`` / ``__DATA__`` section and reassemble

Errors raised by ``transform`` propagate unchanged.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from podmunge.constants import END_MARKER, TRAILING_BLANK_PATTERN
from podmunge.exceptions import EncodingError, TransformContractError
from podmunge.extractor import LogCallable, extract_documentation
from podmunge.options import MungerOptions
from podmunge.perl.nodes import PerlDocument
from podmunge.perl.tokenizer import tokenize
from podmunge.pod.nodes import PodDocument
from podmunge.pod.parser import parse_documentation
from podmunge.replacers import ReplacementPolicy
from podmunge.trailing import extract_trailing_data

logger = logging.getLogger(__name__)


@dataclass
class MungeDocument:
    """The pair handed to and returned from a transform.

    Parameters
    ----------
    code : PerlDocument
        Token tree of the Perl with all Pod removed
    documentation : PodDocument
        The extracted Pod, not yet transformed

    """

    code: PerlDocument
    documentation: PodDocument


def decode_source(perl: Union[str, bytes], encoding: str) -> str:
    """Return ``perl`` as text, verifying it round-trips through ``encoding``.

    Raises
    ------
    EncodingError
        If the text cannot be encoded, or the bytes cannot be decoded

    """
    try:
        data = perl.encode(encoding) if isinstance(perl, str) else perl
        return data.decode(encoding)
    except UnicodeError as e:
        raise EncodingError(
            f"Source does not round-trip through {encoding}: {e}", encoding=encoding, original_error=e
        ) from e


def reassemble(code: str, documentation: str, trailing: str | None) -> str:
    """Join code, Pod and trailing data into the final document.

    Trailing blank lines are trimmed from ``code`` and ``documentation``.
    Without trailing data a canonical ``__END__`` marker separates the two.

    """
    code = TRAILING_BLANK_PATTERN.sub("", code)
    documentation = TRAILING_BLANK_PATTERN.sub("", documentation)
    if trailing is not None:
        return f"{code}\n\n{documentation}\n\n{trailing}"
    return f"{code}\n\n{END_MARKER}\n\n{documentation}\n"


def _unpack_result(result: Any, transform_name: str) -> tuple[PerlDocument, PodDocument]:
    if isinstance(result, Mapping):
        code, documentation = result.get("code"), result.get("documentation")
    else:
        code, documentation = getattr(result, "code", None), getattr(result, "documentation", None)
    if code is None or documentation is None:
        raise TransformContractError(
            f"{transform_name}.transform must return a document with both 'code' and 'documentation'",
            transform_name=transform_name,
        )
    return code, documentation


class PerlMunger(ABC):
    """Base class for rewriting the Pod of Perl documents.

    Parameters
    ----------
    options : MungerOptions or None, default None
        Replacement strategies, encoding and comment marker
    log : callable or None, default None
        Receives the diagnostic issued when string literals contain Pod.
        Defaults to a warning on the ``podmunge.extractor`` logger.

    Attributes
    ----------
    plugin_name : str
        Name used in diagnostics; defaults to the class name

    """

    plugin_name: str | None = None

    def __init__(self, options: MungerOptions | None = None, log: LogCallable | None = None):
        """Initialize the munger and resolve its replacement strategies."""
        self.options = options or MungerOptions()
        self.policy = ReplacementPolicy.from_options(self.options)
        self.log = log
        if self.plugin_name is None:
            self.plugin_name = type(self).__name__

    @abstractmethod
    def transform(self, document: MungeDocument, args: dict[str, Any]) -> MungeDocument:
        """Transform the extracted code and Pod.

        Parameters
        ----------
        document : MungeDocument
            Perl token tree without Pod, plus the Pod as a PodDocument
        args : dict
            The keyword arguments given to ``munge_perl_string``

        Returns
        -------
        MungeDocument
            The (possibly new) code tree and Pod document

        """
        raise NotImplementedError

    def munge_perl_string(self, perl: Union[str, bytes], **args: Any) -> str:
        """Rewrite the Pod of a Perl document.

        Parameters
        ----------
        perl : str or bytes
            Perl source
        **args : Any
            Passed to ``transform``. ``filename`` is also used in diagnostics.

        Returns
        -------
        str
            Code, then ``__END__`` (or the original trailing section) and the Pod

        Raises
        ------
        EncodingError
            If the source does not round-trip through the configured encoding
        ParsingError
            If the Perl cannot be tokenized
        InsertionError
            If a replacement cannot be placed
        TransformContractError
            If ``transform`` returns something without code and documentation

        """
        text = decode_source(perl, self.options.encoding)
        tree = tokenize(text)

        extracted = extract_documentation(
            tree, self.policy, filename=args.get("filename"), log=self.log, plugin_name=self.plugin_name or ""
        )
        documentation = parse_documentation(extracted.text)

        logger.debug(f"{self.plugin_name}: transforming {len(extracted.units)} Pod block(s)")
        result = self.transform(MungeDocument(code=tree, documentation=documentation), args)
        code, documentation = _unpack_result(result, self.plugin_name or type(self).__name__)

        trailing = extract_trailing_data(code)
        return reassemble(code.serialize(), documentation.to_text(), trailing)
