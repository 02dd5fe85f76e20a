import pytest

from linkscout.htmlutil import is_email_link, is_verbatim_elem


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("mailto:foo@example.com", True),
        ("mailto:foo@example.com in a sentence", False),
        ("foo@example.com", True),
        ("foo@example.com in sentence", False),
        ("https://example.org", False),
    ],
)
def test_is_email_link(text, expected):
    assert is_email_link(text) is expected


@pytest.mark.parametrize("name", ["pre", "code", "listing", "script"])
def test_verbatim_matching(name):
    assert is_verbatim_elem(name) is True


@pytest.mark.parametrize("name", ["a", "div", "span"])
def test_non_verbatim_elements(name):
    assert is_verbatim_elem(name) is False