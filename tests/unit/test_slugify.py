"""
Tests for slug generation.
"""
import pytest

from blog.utils.slugify import slugify


class TestSlugify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Introducing the Hamiltonian", "introducing-the-hamiltonian"),
            ("Functors & Monads", "functors-and-monads"),
            ("C'est la vie (part 2)", "cest-la-vie-part-2"),
            ("Yoneda Lémma", "yoneda-lemma"),
            ("  spaced   out  ", "spaced-out"),
            ("snake_case/path", "snake-case-path"),
            ("", ""),
            ("!!!", ""),
        ],
    )
    def test_values(self, text, expected):
        assert slugify(text) == expected

    def test_max_length(self):
        """Truncation never leaves a trailing hyphen."""
        assert slugify("aaaa bbbb", max_length=5) == "aaaa"
