"""Unit tests for vocabularies and word suggestions.

Tests cover:
- Edit distance
- Level vocabularies and their 'extends' chains
- Category lookups and options
- Spelling suggestions
- Loading from a data directory override
"""

import pytest

from gamespeak.engine.vocabulary import (
    Vocabulary,
    edit_distance,
    get_vocabulary,
    load_vocabularies,
    reload_vocabularies,
)
from gamespeak.models.level import SchemaLevel

CUSTOM_VOCABULARY = """\
level1:
  characters: [Cat, dog, cat]
  sounds: [meow]
level2:
  extends: level1
  characters_l2: [tiger]
level3:
  extends: level2
  characters_l3: [lion]
"""


@pytest.fixture
def custom_data_dir(tmp_path, monkeypatch):
    """Point the data directory at a small vocabulary file."""
    (tmp_path / "vocabulary.yaml").write_text(CUSTOM_VOCABULARY)
    monkeypatch.setenv("GAMESPEAK_DATA_DIR", str(tmp_path))
    reload_vocabularies()
    yield tmp_path
    monkeypatch.delenv("GAMESPEAK_DATA_DIR")
    reload_vocabularies()


class TestEditDistance:
    """Tests for edit_distance()."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("bunny", "bunny", 0),
            ("bunyy", "bunny", 1),
            ("", "cat", 3),
            ("cat", "", 3),
        ],
    )
    def test_distances(self, a: str, b: str, expected: int) -> None:
        """Levenshtein distance counts inserts, deletes and swaps."""
        assert edit_distance(a, b) == expected


class TestLevelVocabularies:
    """Tests for the packaged vocabularies."""

    def test_lookup_is_case_insensitive(self) -> None:
        """Words match whatever their case."""
        assert get_vocabulary(SchemaLevel.LEVEL1).contains("Bunny")

    def test_levels_extend_lower_levels(self) -> None:
        """Higher levels know the lower level words plus their own."""
        level1 = get_vocabulary(SchemaLevel.LEVEL1)
        level2 = get_vocabulary(SchemaLevel.LEVEL2)
        level3 = get_vocabulary(SchemaLevel.LEVEL3)

        assert not level1.contains("rocket")
        assert level2.contains("rocket") and level2.contains("bunny")
        assert level3.contains("goblin") and level3.contains("rocket")
        assert level1.word_count() < level2.word_count() < level3.word_count()

    def test_shared_instance(self) -> None:
        """The same vocabulary object is handed out each time."""
        assert get_vocabulary(SchemaLevel.LEVEL2) is get_vocabulary(SchemaLevel.LEVEL2)

    def test_category_order_follows_file(self) -> None:
        """Words keep the order they are written in."""
        words = get_vocabulary(SchemaLevel.LEVEL1).words_in_category("movement")

        assert words == ["arrows", "touch", "auto"]

    def test_unknown_category_raises(self) -> None:
        """Asking for a category that does not exist is a programming error."""
        vocab = get_vocabulary(SchemaLevel.LEVEL1)

        with pytest.raises(KeyError):
            vocab.words_in_category("patterns")
        with pytest.raises(KeyError):
            vocab.is_valid_for_category("zigzag", "patterns")

    def test_is_valid_for_any_category(self) -> None:
        """A word passes if it belongs to any of the categories."""
        vocab = get_vocabulary(SchemaLevel.LEVEL2)

        assert vocab.is_valid_for_category("rocket", "characters", "characters_l2")
        assert not vocab.is_valid_for_category("rocket", "characters")

    def test_options_combine_without_duplicates(self) -> None:
        """Options of several categories are merged in order."""
        options = get_vocabulary(SchemaLevel.LEVEL2).options("sounds", "sounds_l2")

        assert options[0] == "pop"
        assert "victory" in options
        assert len(options) == len(set(options))


class TestSuggestions:
    """Tests for suggest_similar() and closest_in_category()."""

    def test_closest_first(self) -> None:
        """The nearest word comes first."""
        suggestions = get_vocabulary(SchemaLevel.LEVEL1).suggest_similar("bunyy")

        assert suggestions[0] == "bunny"

    def test_limit(self) -> None:
        """No more suggestions than asked for."""
        vocab = get_vocabulary(SchemaLevel.LEVEL1)

        assert len(vocab.suggest_similar("cat")) <= 5
        assert len(vocab.suggest_similar("cat", max_suggestions=2)) <= 2

    def test_nothing_close(self) -> None:
        """Words far from everything get no suggestions."""
        assert get_vocabulary(SchemaLevel.LEVEL1).suggest_similar("zzzzzzzzzzzz") == []

    def test_deterministic(self) -> None:
        """The same word always gives the same suggestions."""
        vocab = get_vocabulary(SchemaLevel.LEVEL3)

        assert vocab.suggest_similar("grn") == vocab.suggest_similar("grn")

    def test_closest_in_category(self) -> None:
        """Only words of the category are considered."""
        vocab = get_vocabulary(SchemaLevel.LEVEL1)

        assert vocab.closest_in_category("bunyy", "characters") == "bunny"
        assert vocab.closest_in_category("dinosaur", "characters") is None


class TestVocabulary:
    """Tests for Vocabulary built directly."""

    def test_words_are_lowercased_and_deduplicated(self) -> None:
        """Duplicate spellings collapse to one lowercase word."""
        vocab = Vocabulary(SchemaLevel.LEVEL1, {"characters": ["Cat", "dog", "cat"]})

        assert vocab.words_in_category("characters") == ["cat", "dog"]
        assert vocab.categories == ["characters"]
        assert vocab.has_category("characters")
        assert not vocab.has_category("sounds")


class TestLoading:
    """Tests for loading vocabulary files."""

    def test_missing_file(self, tmp_path) -> None:
        """A missing data file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_vocabularies(tmp_path / "vocabulary.yaml")

    def test_circular_extends(self, tmp_path) -> None:
        """Levels that extend each other are rejected."""
        path = tmp_path / "vocabulary.yaml"
        path.write_text("level1:\n  extends: level2\nlevel2:\n  extends: level1\nlevel3: {}\n")

        with pytest.raises(ValueError):
            load_vocabularies(path)

    def test_extends_chain(self, tmp_path) -> None:
        """Each level gets the categories of the levels it extends."""
        path = tmp_path / "vocabulary.yaml"
        path.write_text(CUSTOM_VOCABULARY)

        vocabularies = load_vocabularies(path)

        assert vocabularies[SchemaLevel.LEVEL3].categories == [
            "characters",
            "sounds",
            "characters_l2",
            "characters_l3",
        ]

    def test_data_dir_override(self, custom_data_dir) -> None:
        """GAMESPEAK_DATA_DIR points lookups at another file."""
        vocab = get_vocabulary(SchemaLevel.LEVEL2)

        assert vocab.contains("tiger")
        assert not vocab.contains("bunny")
