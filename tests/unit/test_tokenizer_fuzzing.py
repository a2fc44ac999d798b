#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Property-based fuzzing tests for the Perl tokenizer and the munger.

This test module uses Hypothesis to assemble Perl documents from a pool of
well-formed fragments and checks properties that must hold for any of them.

Test Coverage:
- Property: serializing a fresh token tree gives back the input
- Property: extraction removes every Pod token and keeps its text
- Property: munging twice gives the same result as munging once
- Property: the comment strategy keeps line numbers of the code
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from podmunge import identity_transform, munge_perl_string
from podmunge.extractor import extract_documentation
from podmunge.perl import TokenKind, tokenize
from podmunge.replacers import resolve_policy

CODE_FRAGMENTS = [
    "my $x = 1;\n",
    "use strict;\n",
    "\n",
    "# a comment\n",
    "sub foo { return $_[0] / 2 }\n",
    'print "hi\\n";\n',
    "my @a = qw(a b c);\n",
    "my @p = split /,/, $line;\n",
    "$s =~ s{a}{b}g;\n",
    "if ($x) {\n    print 1;\n}\n",
    "my %h = (s => 1, y => 2);\n",
]

POD_FRAGMENTS = [
    "=head1 NAME\n\nFoo\n\n=cut\n",
    "=pod\n\ntext\n\n=cut\n",
    "=head2 Method\n\n  verbatim\n\n=cut\n",
]

TAILS = [
    "",
    "__END__\n",
    "__END__\n\n=head1 AFTER\n\nmore\n",
    "__DATA__\nraw data\n",
]

fragments = st.lists(st.sampled_from(CODE_FRAGMENTS + POD_FRAGMENTS), max_size=12)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestTokenizerFuzzing:
    """Property-based tests for tokenizing assembled documents."""

    @given(fragments, st.sampled_from(TAILS))
    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    def test_round_trip(self, parts, tail):
        """Test that tokenizing never loses or duplicates text."""
        source = "".join(parts) + tail

        assert tokenize(source).serialize() == source

    @given(fragments, st.sampled_from(TAILS))
    @settings(deadline=None)
    def test_extraction_collects_all_pod(self, parts, tail):
        """Test that every Pod block is extracted and removed."""
        source = "".join(parts) + tail
        tree = tokenize(source)
        pod_count = sum(1 for token in tree.tokens() if token.kind == TokenKind.POD)

        result = extract_documentation(tree)

        assert len(result.units) == pod_count
        assert not [token for token in tree.tokens() if token.kind == TokenKind.POD]

    @given(fragments, st.sampled_from(TAILS))
    @settings(deadline=None)
    def test_munging_is_idempotent(self, parts, tail):
        """Test that a second pass changes nothing."""
        once = munge_perl_string("".join(parts) + tail, identity_transform)

        assert munge_perl_string(once, identity_transform) == once

    @given(fragments)
    @settings(deadline=None)
    def test_comment_strategy_keeps_code_lines(self, parts):
        """Test that commented Pod leaves every code token on its line."""
        source = "".join(parts) + "1;\n"
        before = [(token.line, token.content) for token in tokenize(source).tokens() if token.is_code]

        tree = tokenize(source)
        extract_documentation(tree, resolve_policy("comment"))
        after = [(token.line, token.content) for token in tokenize(tree.serialize()).tokens() if token.is_code]

        assert after == before
