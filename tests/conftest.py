"""
Shared fixtures: a small tab-separated translation and synonym file.

The verses are real KJV text, chosen so that the book filter, synonym
expansion and cross-reference scores have predictable answers.
"""

import pytest

from biblesearch.corpus.loader import Corpus, Passage, load_corpus
from biblesearch.synonyms.table import DEFAULT_SYNONYMS, SynonymTable


SAMPLE_BIBLE = """\
KJV
King James Version
Genesis 1:1\tIn the beginning God created the heaven and the earth.
Genesis 1:2\tAnd the earth was without form, and void; and darkness was upon the face of the deep.
Genesis 1:3\tAnd God said, Let there be light: and there was light.
Deuteronomy 6:5\tAnd thou shalt love the LORD thy God with all thine heart, and with all thy soul, and with all thy might.
Psalms 23:1\tThe LORD is my shepherd; I shall not want.
Psalms 23:2\tHe maketh me to lie down in green pastures: he leadeth me beside the still waters.
John 1:1\tIn the beginning was the Word, and the Word was with God, and the Word was God.
John 3:16\tFor God so loved the world, that he gave his only begotten Son, that whosoever believeth in him should not perish, but have everlasting life.
John 11:35\tJesus wept.
1 Corinthians 13:13\tAnd now abideth faith, hope, charity, these three; but the greatest of these is charity.
1 John 4:8\tHe that loveth not knoweth not God; for God is love.
2 John 1:1\tThe elder unto the elect lady and her children, whom I love in the truth.
3 John 1:1\tThe elder unto the wellbeloved Gaius, whom I love in the truth.
"""


def make_passages() -> list[Passage]:
    """The sample translation as Passage objects, in file order."""
    passages = []
    for line in SAMPLE_BIBLE.splitlines()[2:]:
        reference, text = line.split("\t")
        book, _, numbers = reference.rpartition(" ")
        chapter, verse = numbers.split(":")
        passages.append(Passage(book, int(chapter), int(verse), text))
    return passages


@pytest.fixture
def bible_file(tmp_path):
    path = tmp_path / "kjv.txt"
    path.write_text(SAMPLE_BIBLE, encoding="utf-8")
    return path


@pytest.fixture
def corpus(bible_file) -> Corpus:
    return load_corpus(bible_file)


@pytest.fixture
def synonyms_file(tmp_path):
    path = tmp_path / "synonyms.txt"
    path.write_text(DEFAULT_SYNONYMS, encoding="utf-8")
    return path


@pytest.fixture
def synonyms(synonyms_file) -> SynonymTable:
    return SynonymTable.from_file(synonyms_file)
