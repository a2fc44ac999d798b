#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for extracting Pod out of a Perl token tree."""
import logging

import pytest

from podmunge.exceptions import InsertionError
from podmunge.extractor import (
    DocumentationExtractor,
    extract_documentation,
    find_last_code_line,
    find_pod_in_literals,
)
from podmunge.perl import Token, TokenKind, tokenize
from podmunge.replacers import resolve_policy


@pytest.mark.unit
class TestFindLastCodeLine:
    """Test locating the last line of code."""

    def test_last_statement(self, interleaved_module) -> None:
        """Test that the last code-bearing token wins."""
        assert find_last_code_line(tokenize(interleaved_module)) == 9

    def test_comments_and_pod_do_not_count(self) -> None:
        """Test that non-code tokens are ignored."""
        assert find_last_code_line(tokenize("1;\n# trailing\n\n=pod\n\n=cut\n")) == 1

    def test_no_code(self) -> None:
        """Test a document of only Pod."""
        assert find_last_code_line(tokenize("=head1 NAME\n\n=cut\n")) is None

    def test_end_section_text_is_not_code(self) -> None:
        """Test that text after __END__ is ignored."""
        assert find_last_code_line(tokenize("1;\n__END__\nprint 2;\n")) == 1


@pytest.mark.unit
class TestExtraction:
    """Test the extraction pass."""

    def test_units_in_document_order(self, simple_module) -> None:
        """Test that every Pod block is collected with its position."""
        result = extract_documentation(tokenize(simple_module))

        assert [(unit.line, unit.after_last_code) for unit in result.units] == [(3, False), (14, True)]
        assert result.text == "=head1 NAME\n\nFoo\n\n=cut\n\n=head1 DESCRIPTION\n\nBar\n"

    def test_tree_loses_its_pod(self, simple_module) -> None:
        """Test that Pod tokens are removed from the tree."""
        tree = tokenize(simple_module)
        extract_documentation(tree)

        assert not [token for token in tree.tokens() if token.kind == TokenKind.POD]
        assert tree.serialize() == "package Foo;\n\n\nsub bar { 1 }\n\n1;\n__END__\n\n"

    def test_no_code_means_post_code(self) -> None:
        """Test that Pod in a file without code uses the post-code strategy."""
        tree = tokenize("=head1 NAME\n\n=cut\n")
        result = extract_documentation(tree, resolve_policy("blank", "comment"))

        assert result.units[0].after_last_code
        assert tree.serialize() == "#pod =head1 NAME\n#pod\n#pod =cut\n"

    def test_strategies_by_position(self) -> None:
        """Test that Pod before and after the last code use different strategies."""
        tree = tokenize("1;\n\n=pod\n\na\n\n=cut\n\n2;\n\n=pod\n\nb\n")
        extract_documentation(tree, resolve_policy("blank", "nothing"))

        assert tree.serialize() == "1;\n\n\n\n\n\n\n\n2;\n\n"

    def test_nested_pod(self) -> None:
        """Test that Pod inside a block is found."""
        tree = tokenize("sub foo {\n=pod\n\ndoc\n\n=cut\n  return 1;\n}\n")
        result = extract_documentation(tree)

        assert result.units[0].text == "=pod\n\ndoc\n\n=cut\n"
        assert not result.units[0].after_last_code
        assert tree.serialize() == "sub foo {\n  return 1;\n}\n"

    def test_bad_substitute(self) -> None:
        """Test that a strategy returning a non-token fails."""
        tree = tokenize("1;\n\n=pod\n\n=cut\n")

        with pytest.raises(InsertionError):
            extract_documentation(tree, resolve_policy(lambda token: ["#pod\n"]))

    def test_custom_strategy(self) -> None:
        """Test a caller-defined strategy."""
        tree = tokenize("1;\n\n=pod\n\n=cut\n2;\n")

        def marker(token):
            return [Token(TokenKind.COMMENT, f"# pod from line {token.line}\n", line=token.line)]

        extract_documentation(tree, resolve_policy(marker))
        assert tree.serialize() == "1;\n\n# pod from line 3\n2;\n"


@pytest.mark.unit
class TestPodInLiterals:
    """Test the diagnostic for Pod hiding in string literals."""

    SOURCE = 'my $s = "\n=head1 Foo\n";\nmy $t = "\n=item bar\n";\n'

    def test_find_pod_in_literals(self) -> None:
        """Test that both suspicious literals are found."""
        assert len(find_pod_in_literals(tokenize(self.SOURCE))) == 2

    def test_uppercase_is_not_suspicious(self) -> None:
        """Test that only =<lowercase> counts."""
        assert find_pod_in_literals(tokenize('my $s = "\n=Head\n";\n')) == []

    def test_single_log_call(self, recorded_log) -> None:
        """Test that one diagnostic is emitted no matter how many literals match."""
        tree = tokenize(self.SOURCE)
        result = DocumentationExtractor(log=recorded_log.append, plugin_name="Munger").extract(tree, "lib/Foo.pm")

        assert recorded_log == ["can't invoke Munger on lib/Foo.pm: there is POD inside string literals"]
        assert len(result.suspicious_literals) == 2
        assert tree.serialize() == self.SOURCE

    def test_default_display_name(self, recorded_log) -> None:
        """Test that a missing filename is reported as input."""
        DocumentationExtractor(log=recorded_log.append, plugin_name="Munger").extract(tokenize(self.SOURCE))

        assert recorded_log == ["can't invoke Munger on input: there is POD inside string literals"]

    def test_default_log_is_a_warning(self, caplog) -> None:
        """Test that without a sink the diagnostic goes to the logger."""
        with caplog.at_level(logging.WARNING, logger="podmunge.extractor"):
            extract_documentation(tokenize(self.SOURCE), plugin_name="Munger")

        warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "there is POD inside string literals" in warnings[0].getMessage()

    def test_clean_source_is_silent(self, recorded_log) -> None:
        """Test that no diagnostic is emitted for ordinary strings."""
        DocumentationExtractor(log=recorded_log.append).extract(tokenize('print "=head1";\n'))

        assert recorded_log == []
