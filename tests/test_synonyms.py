"""
Tests for the synonym table.
"""

import logging

import pytest

from biblesearch.synonyms.table import (
    DEFAULT_SYNONYMS,
    SynonymGroup,
    SynonymTable,
    create_default,
    load_synonyms,
)


class TestParsing:
    """Test reading synonym files."""

    def test_default_groups(self, synonyms):
        assert len(synonyms) == 19
        assert synonyms.loaded
        god = synonyms.group("god")
        assert god is not None
        assert {"lord", "almighty", "jehovah", "most high"} <= god.terms

    def test_comments_and_blank_lines_ignored(self, tmp_path):
        path = tmp_path / "syn.txt"
        path.write_text("# comment\n\n   \n# god: ignored\nlight: light, lamp\n", encoding="utf-8")
        table = SynonymTable.from_file(path)
        assert [g.keyword for g in table] == ["light"]

    def test_terms_are_lower_cased(self, tmp_path):
        path = tmp_path / "syn.txt"
        path.write_text("Shepherd: Pastor, SHEPHERD , keeper\n", encoding="utf-8")
        table = SynonymTable.from_file(path)
        assert table.group("SHEPHERD").terms == {"shepherd", "pastor", "keeper"}

    def test_keyword_always_in_group(self, tmp_path):
        path = tmp_path / "syn.txt"
        path.write_text("grace: favour, kindness\n", encoding="utf-8")
        table = SynonymTable.from_file(path)
        assert "grace" in table.group("grace")

    def test_repeated_keyword_merges(self, tmp_path):
        path = tmp_path / "syn.txt"
        path.write_text("light: lamp\nlight: candle\n", encoding="utf-8")
        table = SynonymTable.from_file(path)
        assert len(table) == 1
        assert table.group("light").terms == {"light", "lamp", "candle"}

    def test_malformed_lines_skipped(self, tmp_path, caplog):
        path = tmp_path / "syn.txt"
        path.write_text("no separator here\nempty:\nlight: lamp\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            table = SynonymTable.from_file(path)
        assert len(table) == 1
        assert "line 1" in caplog.text
        assert "line 2" in caplog.text

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            SynonymTable.from_file(tmp_path / "missing.txt")


class TestExpansion:
    """Test term expansion."""

    def test_expansion_is_symmetric(self, synonyms):
        for group in synonyms:
            for term in group.terms:
                assert group.terms <= synonyms.expand(term)

    def test_member_expands_to_group(self, synonyms):
        assert synonyms.expand("LORD") == synonyms.expand("god")
        assert "creator" in synonyms.expand("Lord")

    def test_unknown_term(self, synonyms):
        assert synonyms.expand("Shepherd") == {"shepherd"}
        assert not synonyms.has_group("shepherd")

    def test_has_group(self, synonyms):
        assert synonyms.has_group("Beloved")
        assert synonyms.has_group("charity")

    def test_overlapping_groups_union(self):
        table = SynonymTable([
            SynonymGroup("light", frozenset({"lamp"})),
            SynonymGroup("fire", frozenset({"lamp", "flame"})),
        ])
        assert table.expand("lamp") == {"light", "lamp", "fire", "flame"}
        assert table.expand("light") == {"light", "lamp"}

    def test_group_membership_is_case_insensitive(self, synonyms):
        assert "Almighty" in synonyms.group("god")
        assert 3 not in synonyms.group("god")


class TestDefaults:
    """Test the missing-file fallback and default file creation."""

    def test_missing_file_gives_empty_table(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            table = load_synonyms(tmp_path / "missing.txt")
        assert len(table) == 0
        assert not table
        assert not table.loaded
        assert table.expand("God") == {"god"}
        assert "missing.txt" in caplog.text

    def test_empty_table(self):
        table = SynonymTable.empty()
        assert not table
        assert table.groups == []
        assert not table.has_group("god")

    def test_create_default(self, tmp_path):
        path = create_default(tmp_path / "nested" / "synonyms.txt")
        assert path.read_text(encoding="utf-8") == DEFAULT_SYNONYMS
        table = load_synonyms(path)
        assert table.loaded
        assert {g.keyword for g in table} == {
            "god", "jesus", "love", "peace", "joy", "wisdom", "faith", "fear",
            "sin", "salvation", "righteousness", "mercy", "truth", "praise",
            "prayer", "repent", "spirit", "word", "kingdom",
        }
