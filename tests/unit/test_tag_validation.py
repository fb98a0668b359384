"""
Unit tests для валидации тегов.
"""

import pytest

from personal_blog.domain.entities.tag import validate_tag_name, validate_tag_names
from personal_blog.shared.exceptions.domain_exceptions import DomainValidationError


def test_tag_name_is_trimmed():
    assert validate_tag_name("  python  ") == "python"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_tag_name_rejected(name):
    with pytest.raises(DomainValidationError):
        validate_tag_name(name)


def test_tag_name_length_boundary():
    assert validate_tag_name("t" * 100) == "t" * 100

    with pytest.raises(DomainValidationError, match="too long"):
        validate_tag_name("t" * 101)


def test_tag_name_charset():
    """Буквы, цифры, CJK, пробелы и дефисы."""
    assert validate_tag_name("web-dev 2024", check_charset=True) == "web-dev 2024"
    assert validate_tag_name("编程", check_charset=True) == "编程"

    with pytest.raises(DomainValidationError):
        validate_tag_name("c++", check_charset=True)

    # Без проверки набора символов имя принимается как есть
    assert validate_tag_name("c++") == "c++"


def test_tag_set_limit():
    names = [f"tag{i}" for i in range(10)]
    assert validate_tag_names(names) == names

    with pytest.raises(DomainValidationError, match="at most 10"):
        validate_tag_names(names + ["tag10"])


def test_tag_set_deduplicates_in_order():
    assert validate_tag_names(["b", "a", " b ", "a"]) == ["b", "a"]


def test_tag_set_rejects_blank_member():
    with pytest.raises(DomainValidationError):
        validate_tag_names(["ok", ""])
