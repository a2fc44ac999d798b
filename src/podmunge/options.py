#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/options.py
"""Configuration options for Pod munging.

This module defines the frozen dataclass that configures a munger: which
replacement strategies run for Pod before and after the last line of code,
the byte encoding used to validate input, and the marker used when Pod is
replaced by comments.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Union

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from podmunge.constants import DEFAULT_COMMENT_MARKER, DEFAULT_ENCODING, DEFAULT_REPLACER, REPLACER_NAMES
from podmunge.exceptions import ValidationError

ReplacerSpec = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MungerOptions(CloneFrozenMixin):
    """Configuration options for rewriting the Pod of a Perl document.

    Parameters
    ----------
    replacer : str or callable, default "nothing"
        Strategy for Pod that appears before the last line of code. One of
        ``"nothing"``, ``"comment"``, ``"blank"``, or a callable taking a Pod
        token and returning a list of tokens.
    post_code_replacer : str, callable or None, default None
        Strategy for Pod after the last line of code. When None, the same
        strategy as ``replacer`` is used.
    encoding : str, default "utf-8"
        Byte encoding the input must round-trip through.
    comment_marker : str, default "#pod"
        Prefix for each line when Pod is replaced by comments.

    Examples
    --------
    >>> options = MungerOptions(replacer="comment", post_code_replacer="nothing")
    >>> options.create_updated(replacer="blank").replacer
    'blank'

    """

    replacer: ReplacerSpec = field(
        default=DEFAULT_REPLACER,
        metadata={"help": "Replacement for Pod before the last line of code (nothing, comment, blank)"},
    )
    post_code_replacer: ReplacerSpec | None = field(
        default=None,
        metadata={"help": "Replacement for Pod after the last line of code; defaults to the replacer"},
    )
    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={"help": "Byte encoding the source must round-trip through"},
    )
    comment_marker: str = field(
        default=DEFAULT_COMMENT_MARKER,
        metadata={"help": "Line prefix used by the comment replacer"},
    )

    def __post_init__(self) -> None:
        """Validate replacer names, the encoding and the comment marker.

        Raises
        ------
        ValidationError
            If any field value is invalid.

        """
        for name in ("replacer", "post_code_replacer"):
            value = getattr(self, name)
            if value is None and name == "post_code_replacer":
                continue
            if isinstance(value, str):
                if value not in REPLACER_NAMES:
                    raise ValidationError(
                        f"Unknown {name} '{value}'; expected one of {', '.join(REPLACER_NAMES)}",
                        parameter_name=name,
                        parameter_value=value,
                    )
            elif not callable(value):
                raise ValidationError(
                    f"{name} must be a replacer name or a callable", parameter_name=name, parameter_value=value
                )

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValidationError(
                f"Unknown encoding '{self.encoding}'",
                parameter_name="encoding",
                parameter_value=self.encoding,
                original_error=e,
            ) from e

        if not self.comment_marker.startswith("#") or "\n" in self.comment_marker:
            raise ValidationError(
                "comment_marker must be a single line starting with '#'",
                parameter_name="comment_marker",
                parameter_value=self.comment_marker,
            )

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of all option fields."""
        return frozenset(f.name for f in fields(cls))
