# linkscout

linkscout finds links in documents and decides which of them are worth
checking. It reads HTML, Markdown and plain text, and provides the rules a
link checker needs around that: exclusion filters, URL remapping, per-site
request quirks and retry decisions.

## Installation

```
pip install linkscout
```

## Extracting links

```python
from linkscout.extractor import Extractor, FileType, InputContent

content = InputContent.from_string(
    "See [the docs](https://docs.example.org/start) and https://example.net",
    FileType.MARKDOWN,
)
for raw in Extractor().extract(content):
    print(raw.text, raw.element, raw.attribute)
```

Each result is a `RawUri` (from `linkscout.plaintext`) holding the link text
and, where the link came from an HTML element or a Markdown link or image, the
element and attribute names (`a`/`href`, `img`/`src`, ...). Links are returned
in document order.

Links inside Markdown code blocks and inline code, and inside `<pre>`,
`<code>`, `<script>` and other verbatim HTML elements, are skipped by default.
Use `Extractor(include_verbatim=True)` to keep them. In HTML, links on
elements with `rel="nofollow"` are skipped, and e-mail addresses are only
taken from `href` attributes that start with `mailto:`.

`FileType.from_path("notes.md")` picks the file type from a path's extension:
`.md` and `.markdown` are Markdown, `.html` is HTML, anything else is plain
text.

The extractors for each format can also be used on their own:

- `linkscout.html.extract_html(text, include_verbatim)` and
  `linkscout.html.extract_html_fragments(text)`, which collects `id`
  attribute values
- `linkscout.markdown.extract_markdown(text, include_verbatim)` and
  `linkscout.markdown.extract_markdown_fragments(text)`, which produces
  GitHub-style heading anchors (`into_kebab_case`, `HeadingIdGenerator`),
  explicit `{#id}` heading attributes and HTML `id` values
- `linkscout.plaintext.extract_plaintext(text)`, built on `find_links` and
  `find_emails`
- `linkscout.srcset.parse(value)` for `srcset` attribute values, which copes
  with unescaped commas inside URLs
- `linkscout.htmlutil.is_email_link(text)` and `is_verbatim_elem(name)`

## Filtering

```python
from linkscout.filter import Filter, Excludes, parse_uri

flt = Filter(excludes=Excludes([r"github\.com"]), exclude_private_ips=True)
flt.is_excluded(parse_uri("https://github.com/some/repo"))   # True
flt.is_excluded(parse_uri("http://192.168.0.1"))              # True
```

`parse_uri` raises `ValueError` for text that is not an absolute URI.

A `Filter` skips:

- URIs whose scheme is not in `schemes`, when `schemes` is not empty;
- loopback, private and link-local IP addresses when `exclude_loopback_ips`,
  `exclude_private_ips` or `exclude_link_local_ips` are set (`localhost` counts
  as loopback);
- e-mail addresses, unless `include_mail` is set;
- reserved example domains such as `example.com` and TLDs such as `.test`,
  unless `check_example_domains` is set;
- domains known not to be checkable (`twitter.com`);
- well-known false positives such as XML namespace URLs, unless an `Includes`
  pattern matches them.

When `Includes` patterns are given, only matching URIs are checked. Includes
take precedence over `Excludes`.

## Remapping

```python
from linkscout.remap import Remaps

remaps = Remaps.from_strings(["https://docs.example.org file:///srv/site"])
remaps.remap("https://docs.example.org/guide.html")
# 'file:///srv/site/guide.html'
```

Each rule is a regular expression and a replacement, separated by whitespace;
`Remaps` can also be built directly from `(pattern, replacement)` pairs.
Replacements refer to capture groups as `$1`, `$name` or `${name}`, and `$$`
is a literal dollar sign. Only the first matching rule is applied. A malformed
rule string, or a replacement that does not produce a valid URL, raises
`InvalidUrlRemap`.

## Quirks and retries

`linkscout.quirks.Quirks().apply(request)` rewrites a `Request` for sites that
need special handling: requests to crates.io get an `Accept: text/html`
header, and YouTube video links are turned into thumbnail image URLs.

`linkscout.retry` decides whether a failed check is worth retrying:

- `should_retry_status(status)`: server errors, 408 and 429;
- `should_retry_io(error)`: connection resets, aborts and timeouts;
- `should_retry_error(error)`: looks through an exception and its causes,
  including `urllib.error.HTTPError` and `http.client.IncompleteRead`.

## What linkscout does not do

linkscout does not send requests or check whether links work. It has no
command-line program, no HTTP client and no input collection from files,
directories or URLs; it works on strings and `Request` values handed to it.