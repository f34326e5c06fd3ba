"""
Tests for corpus loading, reference lookup and tokenization.
"""

import json
import logging

import pytest

from biblesearch.corpus.loader import (
    Corpus,
    Passage,
    load_corpus,
    lookup_reference,
    parse_reference,
    resolve_passage,
)
from biblesearch.corpus.tokenizer import STOP_WORDS, normalize, tokenize, word_set
from biblesearch.errors import InvalidArgumentError, ParseError, ReferenceNotFoundError

from conftest import make_passages


class TestTextLoader:
    """Test the tab-separated translation format."""

    def test_header(self, corpus):
        assert corpus.abbreviation == "KJV"
        assert corpus.name == "King James Version"

    def test_passage_count(self, corpus):
        assert len(corpus) == 13

    def test_file_order(self, corpus):
        assert list(corpus) == make_passages()

    def test_numbered_book_names(self, corpus):
        p = corpus.get("1 Corinthians", 13, 13)
        assert p is not None
        assert p.book == "1 Corinthians"
        assert p.text.startswith("And now abideth faith")

    def test_books_in_first_appearance_order(self, corpus):
        assert corpus.books == [
            "Genesis", "Deuteronomy", "Psalms", "John",
            "1 Corinthians", "1 John", "2 John", "3 John",
        ]

    def test_malformed_lines_skipped(self, tmp_path, caplog):
        path = tmp_path / "bad.txt"
        path.write_text(
            "KJV\nKing James Version\n"
            "Genesis 1:1\tIn the beginning God created the heaven and the earth.\n"
            "this line has no tab\n"
            "Genesis one:two\tbad reference\n"
            "Genesis 0:1\tchapter zero\n"
            "\n"
            "Genesis 1:1\tduplicate\n"
            "Genesis 1:2\tAnd the earth was without form, and void.\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            corpus = load_corpus(path)
        assert [p.reference for p in corpus] == ["Genesis 1:1", "Genesis 1:2"]
        assert corpus.get("Genesis", 1, 1).text.startswith("In the beginning")
        assert "line 4" in caplog.text
        assert "duplicate" in caplog.text

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_corpus(tmp_path / "missing.txt")

    def test_missing_header(self, tmp_path):
        path = tmp_path / "short.txt"
        path.write_text("KJV\n", encoding="utf-8")
        with pytest.raises(ParseError):
            load_corpus(path)

    def test_no_passages(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("KJV\nKing James Version\nnot a verse\n", encoding="utf-8")
        with pytest.raises(ParseError):
            load_corpus(path)

    def test_byte_order_mark(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_text("\ufeffWEB\nWorld English Bible\nJohn 11:35\tJesus wept.\n", encoding="utf-8")
        corpus = load_corpus(path)
        assert corpus.abbreviation == "WEB"
        assert len(corpus) == 1

    def test_summary(self, corpus):
        summary = corpus.summary()
        assert summary["passages"] == 13
        assert summary["books"] == 8
        assert summary["passages_per_book"]["John"] == 3


class TestJsonLoader:
    """Test the nested JSON translation format."""

    def _write(self, tmp_path, data, name="web.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_load(self, tmp_path):
        path = self._write(tmp_path, {
            "Genesis": {
                "1": {
                    "2": "And the earth was without form, and void.",
                    "1": "In the beginning God created the heaven and the earth.",
                },
                "2": {"1": "Thus the heavens and the earth were finished."},
            },
            "John": {"3": {"16": "For God so loved the world."}},
        })
        corpus = load_corpus(path)
        assert [p.reference for p in corpus] == [
            "Genesis 1:1", "Genesis 1:2", "Genesis 2:1", "John 3:16",
        ]
        assert corpus.abbreviation == "WEB"

    def test_numeric_ordering(self, tmp_path):
        path = self._write(tmp_path, {"Psalms": {"10": {"1": "x"}, "9": {"1": "y"}, "100": {"1": "z"}}})
        corpus = load_corpus(path)
        assert [p.chapter for p in corpus] == [9, 10, 100]

    def test_detected_without_extension(self, tmp_path):
        path = self._write(tmp_path, {"John": {"11": {"35": "Jesus wept."}}}, name="bible.txt")
        corpus = load_corpus(path)
        assert corpus.get("John", 11, 35).text == "Jesus wept."

    def test_non_numeric_keys_skipped(self, tmp_path):
        path = self._write(tmp_path, {"John": {"intro": {"1": "x"}, "1": {"a": "y", "1": "In the beginning"}}})
        corpus = load_corpus(path)
        assert [p.reference for p in corpus] == ["John 1:1"]

    def test_duplicate_numeric_keys_skipped(self, tmp_path, caplog):
        path = self._write(tmp_path, {"Genesis": {"1": {"1": "In the beginning", "01": "duplicate"}}})
        with caplog.at_level(logging.WARNING):
            corpus = load_corpus(path)
        assert [p.text for p in corpus] == ["In the beginning"]
        assert "duplicate Genesis 1:1" in caplog.text

    def test_duplicate_book_case_skipped(self, tmp_path, caplog):
        path = self._write(tmp_path, {
            "Genesis": {"1": {"1": "In the beginning"}},
            "genesis": {"1": {"1": "duplicate", "2": "And the earth"}},
        })
        with caplog.at_level(logging.WARNING):
            corpus = load_corpus(path)
        assert [p.reference for p in corpus] == ["Genesis 1:1", "genesis 1:2"]
        assert corpus.get("GENESIS", 1, 1).text == "In the beginning"
        assert "duplicate genesis 1:1" in caplog.text

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ParseError):
            load_corpus(path)


class TestReferences:
    """Test reference parsing and lookup."""

    @pytest.mark.parametrize("text,expected", [
        ("John 3:16", ("John", 3, 16)),
        ("Genesis 1", ("Genesis", 1, None)),
        ("Psalms", ("Psalms", None, None)),
        ("1 John", ("1 John", None, None)),
        ("1 Kings 2:3", ("1 Kings", 2, 3)),
        ("  Song of Solomon   2:1 ", ("Song of Solomon", 2, 1)),
    ])
    def test_parse_reference(self, text, expected):
        assert parse_reference(text) == expected

    def test_parse_empty_reference(self):
        with pytest.raises(InvalidArgumentError):
            parse_reference("   ")

    def test_every_passage_resolves_to_itself(self, corpus):
        for p in corpus:
            assert lookup_reference(corpus, p.reference) == [p]

    def test_case_insensitive_book(self, corpus):
        assert lookup_reference(corpus, "john 3:16") == [corpus.get("John", 3, 16)]

    def test_chapter_lookup(self, corpus):
        found = lookup_reference(corpus, "Genesis 1")
        assert [p.verse for p in found] == [1, 2, 3]

    def test_book_lookup(self, corpus):
        found = lookup_reference(corpus, "John")
        assert [p.reference for p in found] == ["John 1:1", "John 3:16", "John 11:35"]

    def test_book_lookup_is_exact(self, corpus):
        found = lookup_reference(corpus, "1 John")
        assert [p.reference for p in found] == ["1 John 4:8"]

    def test_not_found(self, corpus):
        with pytest.raises(ReferenceNotFoundError):
            lookup_reference(corpus, "John 3:99")
        with pytest.raises(ReferenceNotFoundError):
            lookup_reference(corpus, "Revelation")

    def test_resolve_passage_requires_verse(self, corpus):
        with pytest.raises(InvalidArgumentError):
            resolve_passage(corpus, "Genesis 1")

    def test_duplicate_passages_rejected(self):
        p = Passage("John", 11, 35, "Jesus wept.")
        with pytest.raises(InvalidArgumentError):
            Corpus([p, Passage("john", 11, 35, "Jesus wept.")])

    def test_passages_are_immutable(self, corpus):
        p = corpus.get("John", 11, 35)
        with pytest.raises(AttributeError):
            p.text = "changed"


class TestTokenizer:
    """Test word splitting and normalization."""

    def test_strips_punctuation(self):
        assert tokenize("And God said, Let there be light: and there was light.") == [
            "And", "God", "said", "Let", "there", "be", "light", "and", "there", "was", "light",
        ]

    def test_keeps_internal_apostrophes_and_hyphens(self):
        assert tokenize("the LORD'S burnt-offering, (selah)") == ["the", "LORD'S", "burnt-offering", "selah"]

    def test_drops_pure_punctuation(self):
        assert tokenize("word -- ; word") == ["word", "word"]

    def test_normalize(self):
        assert normalize("LORD", case_sensitive=True) == "LORD"
        assert normalize("LORD", case_sensitive=False) == "lord"

    def test_word_set_is_case_folded_and_unique(self):
        assert word_set("The LORD is my shepherd; the lord") == {"the", "lord", "is", "my", "shepherd"}

    def test_word_set_stop_words(self):
        words = word_set("And now abideth faith, hope, charity", stop_words=STOP_WORDS, min_length=3)
        assert words == {"now", "abideth", "faith", "hope", "charity"}

    def test_word_set_synonyms(self, synonyms):
        words = word_set("God is love", synonyms=synonyms)
        assert "lord" in words
        assert "beloved" in words
        assert "is" in words
