from pathlib import Path

import pytest

from linkscout.extractor import Extractor, FileType, InputContent
from linkscout.plaintext import RawUri


def texts(content, file_type, include_verbatim=False):
    extractor = Extractor(include_verbatim=include_verbatim)
    return [uri.text for uri in extractor.extract(InputContent.from_string(content, file_type))]


def test_verbatim_elem():
    assert texts("<pre>https://example.com</pre>", FileType.HTML) == []


def test_verbatim_elem_included():
    result = texts("<pre>https://example.com</pre>", FileType.HTML, include_verbatim=True)
    assert result == ["https://example.com"]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (Path("/"), FileType.PLAINTEXT),
        ("test.md", FileType.MARKDOWN),
        ("test.markdown", FileType.MARKDOWN),
        ("test.html", FileType.HTML),
        ("test.txt", FileType.PLAINTEXT),
        ("test.something", FileType.PLAINTEXT),
        ("/absolute/path/to/test.something", FileType.PLAINTEXT),
    ],
)
def test_file_type(path, expected):
    assert FileType.from_path(path) is expected


def test_markdown_anchor_kept_raw():
    extractor = Extractor()
    uris = extractor.extract(InputContent.from_string("This is [a test](#lol).", FileType.MARKDOWN))
    assert uris == [RawUri("#lol", element="a", attribute="href")]


def test_markdown_internal_urls_kept_raw():
    assert texts("This is [a test](./internal).", FileType.MARKDOWN) == ["./internal"]
    assert texts("This is [a test](/internal).", FileType.MARKDOWN) == ["/internal"]


def test_markdown_email():
    result = texts("Get in touch - [Contact Us](mailto:contact@example.com)", FileType.MARKDOWN)
    assert result == ["mailto:contact@example.com"]


def test_non_markdown_links():
    content = "https://endler.dev and https://hello-rust.show/foo/bar?lol=1 at test@example.com"
    assert texts(content, FileType.PLAINTEXT) == [
        "https://endler.dev",
        "https://hello-rust.show/foo/bar?lol=1",
        "test@example.com",
    ]


def test_extract_relative_url():
    contents = """<html>
            <div class="row">
                <a href="https://github.com/lycheeverse/lychee/">Github</a>
                <a href="/about">About</a>
            </div>
        </html>"""
    input_content = InputContent(
        content=contents,
        file_type=FileType.HTML,
        source="https://example.com/some-post",
    )
    links = Extractor().extract(input_content)
    assert {uri.text for uri in links} == {"https://github.com/lycheeverse/lychee/", "/about"}


def test_extract_custom_elements():
    contents = (
        '<some-weird-element href="https://example.com/some-weird-element"></some-weird-element>'
        '<even-weirder src="https://example.com/even-weirder-src"></even-weirder>'
        '<blockquote cite="https://example.com/citations">quote</blockquote>'
    )
    assert set(texts(contents, FileType.HTML)) == {
        "https://example.com/some-weird-element",
        "https://example.com/even-weirder-src",
        "https://example.com/citations",
    }


def test_extract_urls_with_at_sign_properly():
    content = "https://example.com/@test/test http://otherdomain.com/test/@test"
    assert texts(content, FileType.PLAINTEXT) == [
        "https://example.com/@test/test",
        "http://otherdomain.com/test/@test",
    ]


def test_extract_link_at_end_of_line():
    content = "https://www.apache.org/licenses/LICENSE-2.0\n"
    assert texts(content, FileType.PLAINTEXT) == ["https://www.apache.org/licenses/LICENSE-2.0"]


def test_markdown_code_block_respects_include_verbatim():
    content = "```\nhttps://bar.com/123\n```\n"
    assert texts(content, FileType.MARKDOWN) == []
    assert texts(content, FileType.MARKDOWN, include_verbatim=True) == ["https://bar.com/123"]