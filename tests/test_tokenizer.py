"""
Field tokenizer: test_tokenizer.py

tokenizer.py:
  - Unqualified fields split on the delimiter, in order
  - Joining known fields with the delimiter and tokenizing gives them back
  - Empty row → [] (not [""])
  - Consecutive / leading / trailing delimiters → empty fields
  - Whitespace is preserved
  - Qualified field containing the delimiter stays one field
  - Qualifiers are stripped, doubled qualifiers are not unescaped
  - Unterminated qualifier runs to end of row
  - Text after a closing qualifier up to the next delimiter is dropped
  - Qualifier in the middle of a field is literal
  - No qualifier configured → quote characters are ordinary text
  - Custom delimiters (semicolon, tab, pipe)
  - Multi-character delimiter rejected
"""

from __future__ import annotations

import pytest

from csvcursor.configs.exceptions import ConfigError
from csvcursor.discovery.tokenizer import tokenize


# ============================================================================
# Unqualified rows
# ============================================================================

class TestUnqualified:
    def test_simple_row(self):
        assert tokenize("id,name,email") == ["id", "name", "email"]

    def test_single_field(self):
        assert tokenize("Alice") == ["Alice"]

    @pytest.mark.parametrize(
        "fields",
        [
            ["1", "Alice", "alice@example.com"],
            ["x"],
            ["a", "b", "c", "d", "e", "f"],
            ["2024-01-31", "100.50", "true"],
        ],
    )
    def test_join_then_tokenize_gives_fields_back(self, fields):
        result = tokenize(",".join(fields))
        assert result == fields
        assert all("," not in f for f in result)

    def test_empty_row_has_no_fields(self):
        assert tokenize("") == []

    def test_empty_middle_field(self):
        assert tokenize("a,,b") == ["a", "", "b"]

    def test_leading_delimiter(self):
        assert tokenize(",a") == ["", "a"]

    def test_trailing_delimiter(self):
        assert tokenize("a,") == ["a", ""]

    def test_only_delimiters(self):
        assert tokenize(",,") == ["", "", ""]

    def test_whitespace_not_trimmed(self):
        assert tokenize("  a , b  ") == ["  a ", " b  "]

    def test_quotes_are_text_without_qualifier(self):
        assert tokenize('"a","b"') == ['"a"', '"b"']


# ============================================================================
# Qualified rows
# ============================================================================

class TestQualified:
    def test_mixed_qualified_and_plain(self):
        assert tokenize('"a","b,c",d', ",", '"') == ["a", "b,c", "d"]

    def test_all_qualified(self):
        assert tokenize('"1","Alice","NY"', ",", '"') == ["1", "Alice", "NY"]

    def test_qualified_field_keeps_delimiters(self):
        assert tokenize('x,"1,2,3",y', ",", '"') == ["x", "1,2,3", "y"]

    def test_qualified_last_field(self):
        assert tokenize('a,"b,c"', ",", '"') == ["a", "b,c"]

    def test_empty_qualified_field(self):
        assert tokenize('"",b', ",", '"') == ["", "b"]

    def test_qualified_then_trailing_delimiter(self):
        assert tokenize('"a",', ",", '"') == ["a", ""]

    def test_doubled_qualifier_not_unescaped(self):
        # Field ends at the first inner qualifier; the rest up to ',' is dropped.
        assert tokenize('"say ""hi""",x', ",", '"') == ["say ", "x"]

    def test_unterminated_qualifier_runs_to_end(self):
        assert tokenize('a,"b,c', ",", '"') == ["a", "b,c"]

    def test_lone_qualifier(self):
        assert tokenize('"', ",", '"') == [""]

    def test_text_after_closing_qualifier_dropped(self):
        assert tokenize('"a"junk,b', ",", '"') == ["a", "b"]

    def test_mid_field_qualifier_is_literal(self):
        assert tokenize('ab"c,d', ",", '"') == ['ab"c', "d"]

    def test_single_quote_qualifier(self):
        assert tokenize("'a;b';c", ";", "'") == ["a;b", "c"]


# ============================================================================
# Delimiters
# ============================================================================

class TestDelimiters:
    @pytest.mark.parametrize("delimiter", [";", "\t", "|"])
    def test_custom_delimiter(self, delimiter):
        row = delimiter.join(["a", "b,c", "d"])
        assert tokenize(row, delimiter) == ["a", "b,c", "d"]

    def test_multi_character_delimiter_rejected(self):
        with pytest.raises(ConfigError):
            tokenize("a::b", "::")

    def test_empty_delimiter_rejected(self):
        with pytest.raises(ConfigError):
            tokenize("ab", "")
