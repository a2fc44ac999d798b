#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/api.py
"""Functional entry point for munging a Perl string with a plain callable."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from podmunge.extractor import LogCallable
from podmunge.munger import MungeDocument, PerlMunger
from podmunge.options import MungerOptions

logger = logging.getLogger(__name__)

TransformCallable = Callable[[MungeDocument, dict[str, Any]], MungeDocument]


def identity_transform(document: MungeDocument, args: dict[str, Any]) -> MungeDocument:
    """Return the document unchanged; only relocates the Pod."""
    return document


class FunctionMunger(PerlMunger):
    """A ``PerlMunger`` whose transform is a callable supplied at construction.

    Parameters
    ----------
    transform : callable
        Called as ``transform(document, args)``; must return a MungeDocument
    options : MungerOptions or None, default None
        Munging options
    log : callable or None, default None
        Diagnostic sink
    plugin_name : str or None, default None
        Name used in diagnostics; defaults to the callable's name

    """

    def __init__(
        self,
        transform: TransformCallable,
        options: MungerOptions | None = None,
        log: LogCallable | None = None,
        plugin_name: str | None = None,
    ):
        """Initialize the munger around ``transform``."""
        if not callable(transform):
            raise TypeError(f"transform must be callable, got {type(transform).__name__}")
        self._transform = transform
        self.plugin_name = plugin_name or getattr(transform, "__name__", None) or type(self).__name__
        super().__init__(options=options, log=log)

    def transform(self, document: MungeDocument, args: dict[str, Any]) -> MungeDocument:
        """Delegate to the wrapped callable."""
        return self._transform(document, args)


def _split_option_kwargs(
    options: Optional[MungerOptions], kwargs: dict[str, Any]
) -> tuple[MungerOptions, dict[str, Any]]:
    """Separate option overrides from the arguments meant for the transform."""
    names = MungerOptions.field_names()
    overrides = {key: value for key, value in kwargs.items() if key in names}
    args = {key: value for key, value in kwargs.items() if key not in names}
    base = options or MungerOptions()
    if overrides:
        logger.debug(f"Overriding munger options: {sorted(overrides)}")
        base = base.create_updated(**overrides)
    return base, args


def munge_perl_string(
    perl: Union[str, bytes],
    transform: TransformCallable,
    *,
    options: Optional[MungerOptions] = None,
    log: Optional[LogCallable] = None,
    **kwargs: Any,
) -> str:
    """Rewrite the Pod of a Perl document with a callable transform.

    Parameters
    ----------
    perl : str or bytes
        Perl source
    transform : callable
        Called as ``transform(document, args)`` with a MungeDocument
    options : MungerOptions, optional
        Pre-configured munging options
    log : callable, optional
        Receives the diagnostic issued when string literals contain Pod
    kwargs : Any
        Keyword arguments naming a ``MungerOptions`` field override
        ``options``; all others (e.g. ``filename``) are passed to ``transform``.

    Returns
    -------
    str
        The reassembled document

    Examples
    --------
    >>> munge_perl_string("my $x = 1;\\n\\n=head1 NAME\\n\\nHello\\n\\n", identity_transform)
    'my $x = 1;\\n\\n__END__\\n\\n=pod\\n\\n=head1 NAME\\n\\nHello\\n\\n=cut\\n'

    Comment out Pod that sits between code:
        >>> munge_perl_string(source, identity_transform, replacer="comment", post_code_replacer="nothing")

    """
    resolved_options, args = _split_option_kwargs(options, kwargs)
    munger = FunctionMunger(transform, options=resolved_options, log=log)
    return munger.munge_perl_string(perl, **args)
