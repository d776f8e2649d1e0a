import pytest

from services.text_normalizer import content_tokens, normalize, tokenize


def test_normalize_lowercases_and_collapses_whitespace():
    assert normalize("  Hello   WORLD\n\tFoo ") == "hello world foo"


def test_normalize_keeps_technical_terms():
    assert normalize("Node.js, C++ and C#; CI/CD.") == "node.js c++ and c# ci/cd"


def test_normalize_keeps_leading_dot():
    assert normalize("Shipped .NET Core services") == "shipped .net core services"


def test_normalize_treats_punctuation_as_separator():
    assert normalize("Hello, world! (2024)") == "hello world 2024"
    assert normalize("Cut costs by 40%.") == "cut costs by 40"


def test_normalize_drops_non_printable():
    assert normalize("Python\x00 developer\x07") == "python developer"


def test_normalize_applies_unicode_compatibility_forms():
    # The "fi" ligature decomposes to plain letters
    assert normalize("Proﬁle") == "profile"


def test_normalize_empty():
    assert normalize("") == ""
    assert normalize("   \n\t ") == ""
    assert tokenize("") == []
    assert tokenize(" ... ") == []


@pytest.mark.parametrize(
    "text",
    [
        "Senior Engineer @ ACME | 2019 - Present",
        "Built REST APIs with Node.js, Express & MongoDB.",
        "Café – Résumé, B.S. Computer Science",
        "C++/Qt, C#/.NET, scikit-learn",
    ],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_tokenize_splits_normalized_text():
    assert tokenize("Python, Docker & AWS") == ["python", "docker", "aws"]


def test_content_tokens_drops_stop_words():
    assert content_tokens(["the", "python", "and", "docker"]) == ["python", "docker"]


def test_content_tokens_keeps_all_stop_word_input():
    assert content_tokens(["the", "and", "of"]) == ["the", "and", "of"]
    assert content_tokens([]) == []
