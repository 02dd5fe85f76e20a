from linkscout.plaintext import RawUri, extract_plaintext, find_emails, find_links


def test_extract_local_links():
    text = "http://127.0.0.1/ and http://127.0.0.1:8888/ are local links."
    assert extract_plaintext(text) == [
        RawUri("http://127.0.0.1/"),
        RawUri("http://127.0.0.1:8888/"),
    ]


def test_extract_link_at_end_of_line():
    text = "https://www.apache.org/licenses/LICENSE-2.0\n"
    assert extract_plaintext(text) == [RawUri(text.rstrip())]


def test_raw_uri_from_text_has_no_element():
    assert RawUri("https://example.com") == RawUri("https://example.com", None, None)


def test_links_and_emails_in_order():
    text = "https://endler.dev and https://hello-rust.show/foo/bar?lol=1 at test@example.com"
    assert list(find_links(text)) == [
        "https://endler.dev",
        "https://hello-rust.show/foo/bar?lol=1",
        "test@example.com",
    ]


def test_urls_with_at_sign_are_not_emails():
    text = "https://example.com/@test/test http://otherdomain.com/test/@test"
    assert list(find_links(text)) == [
        "https://example.com/@test/test",
        "http://otherdomain.com/test/@test",
    ]


def test_trailing_punctuation_is_dropped():
    assert list(find_links("Visit https://example.com/page.")) == [
        "https://example.com/page"
    ]


def test_unbalanced_closing_paren_is_dropped():
    assert list(find_links("(see https://example.com/foo)")) == ["https://example.com/foo"]


def test_balanced_parens_are_kept():
    assert list(find_links("https://example.com/wiki/Foo_(bar)")) == [
        "https://example.com/wiki/Foo_(bar)"
    ]


def test_no_links_in_plain_words():
    assert list(find_links("nothing to see here")) == []


def test_find_emails_after_mailto():
    assert list(find_emails("mailto:foo@example.com")) == ["foo@example.com"]


def test_find_emails_needs_dot_in_domain():
    assert list(find_emails("foo@localhost")) == []