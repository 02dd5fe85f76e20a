"""Extract links and fragments from HTML documents.

Elements and attributes are processed in document order. Links are taken
from attributes known to hold URLs, from `srcset` candidates, and from plain
text anywhere else (attribute values and character data alike). Content of
preformatted ("verbatim") elements is skipped unless asked for.
"""

from __future__ import annotations

from html.parser import HTMLParser

from linkscout import srcset
from linkscout.htmlutil import is_email_link, is_verbatim_elem
from linkscout.plaintext import RawUri, extract_plaintext

_LINK_ATTRIBUTES = frozenset({"href", "src", "cite", "usemap"})

_LINK_ELEMENT_ATTRIBUTES = frozenset(
    {
        ("applet", "codebase"),
        ("body", "background"),
        ("button", "formaction"),
        ("command", "icon"),
        ("form", "action"),
        ("frame", "longdesc"),
        ("head", "profile"),
        ("html", "manifest"),
        ("iframe", "longdesc"),
        ("img", "longdesc"),
        ("input", "formaction"),
        ("object", "classid"),
        ("object", "codebase"),
        ("object", "data"),
        ("video", "poster"),
    }
)


def extract_urls_from_elem_attr(
    attr_name: str, elem_name: str, attr_value: str
) -> list[str] | None:
    """Return the URLs an attribute is known to hold, or None if it holds none."""
    if attr_name in _LINK_ATTRIBUTES or (elem_name, attr_name) in _LINK_ELEMENT_ATTRIBUTES:
        return [attr_value]
    if attr_name == "srcset":
        return srcset.parse(attr_value)
    return None


class _LinkExtractor(HTMLParser):
    """Collects links and `id` fragments while the document is tokenized."""

    def __init__(self, include_verbatim: bool) -> None:
        super().__init__(convert_charrefs=True)
        self.links: list[RawUri] = []
        self.fragments: set[str] = set()
        self._include_verbatim = include_verbatim
        self._pending_text: list[str] = []
        self._element_name = ""
        self._element_closing = False
        self._element_nofollow = False
        self._attr_name = ""
        self._attr_value = ""
        self._verbatim_element: str | None = None

    # Tokenizer callbacks

    def handle_starttag(self, tag, attrs):
        self._start_tag(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag, attrs):
        self._start_tag(tag, attrs, self_closing=True)

    def handle_endtag(self, tag):
        self._init_tag()
        self._element_closing = True
        self._element_name = tag
        self._flush_attribute()

    def handle_data(self, data):
        self._pending_text.append(data)

    def handle_comment(self, data):
        self._flush_characters()

    def handle_decl(self, decl):
        self._flush_characters()

    def handle_pi(self, data):
        self._flush_characters()

    def unknown_decl(self, data):
        self._flush_characters()

    def close(self):
        super().close()
        self._flush_characters()

    # Internal state handling

    def _start_tag(self, tag, attrs, self_closing):
        self._init_tag()
        self._element_name = tag
        for name, value in attrs:
            self._flush_attribute()
            self._attr_name += name
            self._attr_value += value or ""
        if self_closing:
            self._element_closing = True
        self._flush_attribute()

    def _init_tag(self):
        self._flush_characters()
        self._element_name = ""
        self._element_nofollow = False
        self._element_closing = False

    @property
    def _inside_verbatim_block(self) -> bool:
        return self._verbatim_element is not None

    def _skips_verbatim(self) -> bool:
        return not self._include_verbatim and (
            is_verbatim_elem(self._element_name) or self._inside_verbatim_block
        )

    def _update_verbatim_element(self):
        if self._element_closing:
            if self._inside_verbatim_block and self._element_name == self._verbatim_element:
                self._verbatim_element = None
                self._attr_name = ""
                self._attr_value = ""
        elif not self._include_verbatim and is_verbatim_elem(self._element_name):
            if not self._inside_verbatim_block:
                self._verbatim_element = self._element_name

    def _flush_characters(self):
        text = "".join(self._pending_text)
        self._pending_text.clear()
        if self._skips_verbatim():
            self._update_verbatim_element()
            return
        self.links.extend(extract_plaintext(text))

    def _flush_attribute(self):
        if self._skips_verbatim():
            self._update_verbatim_element()
            return

        name = self._element_name
        attr = self._attr_name
        value = self._attr_value

        if attr == "rel" and "nofollow" in value:
            self._element_nofollow = True
        if self._element_nofollow:
            self._attr_name = ""
            self._attr_value = ""
            return

        urls = extract_urls_from_elem_attr(attr, name, value)
        if urls is None:
            self.links.extend(extract_plaintext(value))
        else:
            self.links.extend(
                RawUri(url, element=name, attribute=attr)
                for url in urls
                if _is_acceptable(url, attr)
            )

        if attr == "id":
            self.fragments.add(value)

        self._attr_name = ""
        self._attr_value = ""


def _is_acceptable(url: str, attr: str) -> bool:
    # E-mail addresses are only taken from `href` attributes using `mailto:`;
    # elsewhere they are mostly false positives.
    if not is_email_link(url):
        return True
    return url.startswith("mailto:") and attr == "href"


def _run(text: str, include_verbatim: bool) -> _LinkExtractor:
    extractor = _LinkExtractor(include_verbatim)
    extractor.feed(text)
    extractor.close()
    return extractor


def extract_html(text: str, include_verbatim: bool) -> list[RawUri]:
    """Extract unparsed links from an HTML string, in document order."""
    return _run(text, include_verbatim).links


def extract_html_fragments(text: str) -> set[str]:
    """Extract the values of all `id` attributes from an HTML string."""
    return _run(text, True).fragments