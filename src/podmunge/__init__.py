#  Copyright (c) 2025 Tom Villani, Ph.D.
"""podmunge - rewrite the embedded Pod of Perl source documents.

podmunge takes a string of Perl, strips out all of its Pod, lets a transform
rewrite the code and the Pod, and reassembles a new document with the Pod
moved after an ``__END__`` marker (or ahead of an existing ``__DATA__`` /
``__END__`` section, which is kept verbatim at the very end).

Key Features
------------
- Lossless Perl tokenizer that separates code, Pod, comments and literals
- Pluggable replacement of extracted Pod: nothing, ``#pod`` comments or blank lines
- Pod paragraph model with transformer helpers
- Warning when Pod-like lines hide inside string literals

Examples
--------
Subclass ``PerlMunger``:

    >>> from podmunge import PerlMunger
    >>> class Identity(PerlMunger):
    ...     def transform(self, document, args):
    ...         return document
    >>> Identity().munge_perl_string("my $x = 1;\\n\\n=head1 NAME\\n\\nHello\\n\\n")
    'my $x = 1;\\n\\n__END__\\n\\n=pod\\n\\n=head1 NAME\\n\\nHello\\n\\n=cut\\n'

Or pass a callable:

    >>> from podmunge import munge_perl_string, identity_transform
    >>> new_perl = munge_perl_string(source, identity_transform, filename="lib/Foo.pm")

See Also
--------
podmunge.perl : Perl tokenizer and token tree
podmunge.pod : Pod document model and transformers

"""

from podmunge.api import FunctionMunger, identity_transform, munge_perl_string
from podmunge.exceptions import (
    EncodingError,
    InsertionError,
    ParsingError,
    PodMungeError,
    TransformContractError,
    ValidationError,
)
from podmunge.extractor import DocumentationExtractor, DocumentationUnit, ExtractionResult, extract_documentation
from podmunge.munger import MungeDocument, PerlMunger, reassemble
from podmunge.options import MungerOptions
from podmunge.replacers import (
    ReplacementPolicy,
    replace_with_blank,
    replace_with_comment,
    replace_with_nothing,
    resolve_policy,
)
from podmunge.trailing import extract_trailing_data

__version__ = "0.1.0"

__all__ = [
    "DocumentationExtractor",
    "DocumentationUnit",
    "EncodingError",
    "ExtractionResult",
    "FunctionMunger",
    "InsertionError",
    "MungeDocument",
    "MungerOptions",
    "ParsingError",
    "PerlMunger",
    "PodMungeError",
    "ReplacementPolicy",
    "TransformContractError",
    "ValidationError",
    "__version__",
    "extract_documentation",
    "extract_trailing_data",
    "identity_transform",
    "munge_perl_string",
    "reassemble",
    "replace_with_blank",
    "replace_with_comment",
    "replace_with_nothing",
    "resolve_policy",
]
