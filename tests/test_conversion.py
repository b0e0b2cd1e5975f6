"""Tests for parsing, extraction and Markdown conversion."""

import pytest
from bs4 import BeautifulSoup
from conftest import ARTICLE_HTML
from lineclip.conversion import HtmlParser, HtmlToMarkdown, ReadabilityExtractor, SelectorExtractor
from lineclip.conversion.extractor import page_title
from lineclip.exceptions import ExtractionError, ParseError

URL = "https://blog.example.com/posts/widgets"


class TestHtmlParser:
    """Tests for HtmlParser."""

    def test_parses_document(self):
        """Test that a normal document yields a tree."""
        soup = HtmlParser().parse("<html><body><p>Hi</p></body></html>")
        assert soup.find("p").get_text() == "Hi"

    def test_parses_fragment(self):
        """Test that fragments without <html> are accepted."""
        soup = HtmlParser().parse("<h1>Hello</h1><p>World</p>")
        assert soup.find("h1").get_text() == "Hello"

    @pytest.mark.parametrize("text", ["", "  \n\t", "no markup at all"])
    def test_rejects_non_markup(self, text):
        """Test ParseError for inputs without elements."""
        with pytest.raises(ParseError):
            HtmlParser().parse(text)


class TestPageTitle:
    """Tests for title discovery."""

    def test_prefers_og_title(self):
        """Test og:title over <title>."""
        soup = BeautifulSoup(
            '<html><head><meta property="og:title" content="OG Title"><title>Doc Title</title></head></html>',
            "html.parser",
        )
        assert page_title(soup) == "OG Title"

    def test_falls_back_to_title_then_h1(self):
        """Test the fallback order."""
        assert page_title(BeautifulSoup("<title> Doc\n Title </title><h1>H</h1>", "html.parser")) == "Doc Title"
        assert page_title(BeautifulSoup("<h1>Only <em>Heading</em></h1>", "html.parser")) == "Only Heading"

    def test_empty_when_missing(self):
        """Test pages without any title."""
        assert page_title(BeautifulSoup("<p>text</p>", "html.parser")) == ""


class TestReadabilityExtractor:
    """Tests for ReadabilityExtractor."""

    def test_extracts_article(self):
        """Test that the article body is kept and chrome is dropped."""
        soup = HtmlParser().parse(ARTICLE_HTML)

        page = ReadabilityExtractor().extract(soup, URL)
        text = page.content.get_text()

        assert "Widgets are small" in text
        assert "Every widget starts as a sketch" in text
        assert "All rights reserved" not in text
        assert page.title

    def test_resolves_relative_links(self):
        """Test that links in the extracted content are absolute."""
        soup = HtmlParser().parse(ARTICLE_HTML)

        page = ReadabilityExtractor().extract(soup, URL)
        hrefs = [a["href"] for a in page.content.find_all("a", href=True)]

        assert "https://blog.example.com/docs/widgets" in hrefs

    def test_keeps_code_language_class(self):
        """Test that language hints survive cleaning."""
        soup = HtmlParser().parse(ARTICLE_HTML)

        page = ReadabilityExtractor().extract(soup, URL)
        code = page.content.find("code")

        assert code is not None
        assert "language-python" in code.get("class", [])

    def test_does_not_modify_input_tree(self):
        """Test that the caller's soup is left intact."""
        soup = HtmlParser().parse(ARTICLE_HTML)
        before = str(soup)

        ReadabilityExtractor().extract(soup, URL)

        assert str(soup) == before

    def test_untitled_page_raises(self):
        """Test ExtractionError when no title can be found."""
        soup = HtmlParser().parse("<html><body><p>Text without any heading or title.</p></body></html>")

        with pytest.raises(ExtractionError):
            ReadabilityExtractor().extract(soup, URL)

    @pytest.mark.parametrize("wrapper", ["div", 'div id="content"'])
    def test_short_div_content_falls_back_to_body(self, wrapper):
        """Test that short content in a plain <div> is kept."""
        tag = wrapper.split()[0]
        soup = HtmlParser().parse(
            f"<html><head><title>Greeting</title></head>"
            f"<body><{wrapper}><h1>Hello</h1><p>World</p></{tag}></body></html>"
        )

        page = ReadabilityExtractor().extract(soup, URL)

        assert page.title == "Greeting"
        assert page.content.find("h1").get_text() == "Hello"
        assert page.content.find("p").get_text() == "World"

    def test_fallback_still_drops_chrome(self):
        """Test that the fallback content is cleaned like readability output."""
        soup = HtmlParser().parse(
            "<html><head><title>Greeting</title></head><body><nav><a href='/'>Home</a></nav>"
            "<div><p>World</p></div><script>track()</script></body></html>"
        )

        page = ReadabilityExtractor().extract(soup, URL)
        text = page.content.get_text()

        assert "World" in text
        assert "Home" not in text
        assert "track" not in text

    def test_empty_page_raises(self):
        """Test ExtractionError when neither readability nor the fallback finds text."""
        soup = HtmlParser().parse("<html><head><title>Empty</title></head><body><div></div></body></html>")

        with pytest.raises(ExtractionError):
            ReadabilityExtractor().extract(soup, URL)


class TestSelectorExtractor:
    """Tests for SelectorExtractor."""

    def test_extracts_from_article_tag(self):
        """Test extraction from article tag."""
        soup = HtmlParser().parse(ARTICLE_HTML)

        page = SelectorExtractor().extract(soup, URL)
        text = page.content.get_text()

        assert "Widgets are small" in text
        assert "About" not in text
        assert "All rights reserved" not in text
        assert page.title == "Understanding Widgets | Acme Blog"

    def test_falls_back_to_body(self):
        """Test that short pages use the whole body."""
        soup = HtmlParser().parse("<html><head><title>T</title></head><body><h1>Hello</h1><p>World</p></body></html>")

        page = SelectorExtractor().extract(soup, URL)

        assert page.content.find("h1").get_text() == "Hello"
        assert page.content.find("p").get_text() == "World"

    def test_removes_scripts_and_styles(self):
        """Test that scripts and styles are removed."""
        soup = HtmlParser().parse(
            """<html><head><title>T</title></head><body>
            <script>alert("bad")</script>
            <style>.bad { color: red; }</style>
            <p>Good content</p>
            </body></html>"""
        )

        page = SelectorExtractor().extract(soup, URL)
        text = page.content.get_text()

        assert "alert" not in text
        assert ".bad" not in text
        assert "Good content" in text

    def test_resolves_relative_sources(self):
        """Test that link and image targets become absolute."""
        soup = HtmlParser().parse(
            '<html><head><title>T</title></head><body><a href="../about">About us</a>'
            '<img src="img/x.png" alt="X"><a href="#top">Top</a></body></html>'
        )

        page = SelectorExtractor().extract(soup, URL)

        assert page.content.find("a")["href"] == "https://blog.example.com/about"
        assert page.content.find("img")["src"] == "https://blog.example.com/posts/img/x.png"
        assert page.content.find_all("a")[1]["href"] == "#top"

    def test_strips_attributes(self):
        """Test that presentational attributes are dropped."""
        soup = HtmlParser().parse(
            '<html><head><title>T</title></head><body><p style="color: red" data-x="1" class="lead">Hi</p></body></html>'
        )

        page = SelectorExtractor().extract(soup, URL)
        p = page.content.find("p")

        assert p.attrs == {"class": ["lead"]}

    def test_empty_body_raises(self):
        """Test ExtractionError for pages without text."""
        soup = HtmlParser().parse("<html><head><title>T</title></head><body><div></div></body></html>")

        with pytest.raises(ExtractionError):
            SelectorExtractor().extract(soup, URL)


class TestHtmlToMarkdown:
    """Tests for HtmlToMarkdown converter."""

    def test_heading_and_paragraph(self):
        """Test the minimal heading/paragraph document."""
        result = HtmlToMarkdown().convert("<h1>Hello</h1><p>World</p>", URL)

        assert result == "# Hello\n\nWorld\n"

    def test_converts_heading_levels(self):
        """Test heading conversion."""
        result = HtmlToMarkdown().convert("<h1>Title</h1><h2>Subtitle</h2><h3>Section</h3>", URL)
        lines = result.split("\n")

        assert "# Title" in lines
        assert "## Subtitle" in lines
        assert "### Section" in lines

    def test_converts_lists(self):
        """Test list conversion."""
        result = HtmlToMarkdown().convert("<ul><li>Item 1</li><li>Item 2</li></ul><ol><li>First</li></ol>", URL)

        assert "* Item 1" in result
        assert "* Item 2" in result
        assert "1. First" in result

    def test_converts_links(self):
        """Test link conversion with absolute and relative targets."""
        result = HtmlToMarkdown().convert(
            '<p><a href="https://example.com/page">Link Text</a> and <a href="/other">Other</a></p>',
            URL,
        )

        assert "[Link Text](https://example.com/page)" in result
        assert "[Other](https://blog.example.com/other)" in result

    def test_fenced_code_with_language(self):
        """Test that <pre> blocks become fenced code with their language."""
        html = "<p>Example:</p><pre><code class=\"language-python\">def hello():\n    print('Hello')</code></pre>"

        result = HtmlToMarkdown().convert(html, URL)

        assert "```python\ndef hello():\n    print('Hello')\n```" in result

    def test_fenced_code_without_language(self):
        """Test plain <pre> blocks."""
        result = HtmlToMarkdown().convert("<pre>a  b\n\n\n\nc   </pre>", URL)

        assert result == "```\na  b\n\n\n\nc   \n```\n"

    def test_code_with_backticks_gets_longer_fence(self):
        """Test that embedded fences do not terminate the block."""
        result = HtmlToMarkdown().convert("<pre>```\nnested\n```</pre>", URL)

        assert result.startswith("````\n```\nnested\n```\n````")

    def test_language_from_pre_class(self):
        """Test highlight-source-* classes on <pre>."""
        result = HtmlToMarkdown().convert('<pre class="highlight-source-js">x()</pre>', URL)

        assert result.startswith("```js\nx()\n```")

    def test_images(self):
        """Test that images keep alt text and an absolute URL."""
        result = HtmlToMarkdown().convert('<p><img src="https://cdn.example.com/d.png" alt="Diagram"></p>', URL)

        assert "![Diagram](https://cdn.example.com/d.png)" in result

    def test_data_images_reduce_to_alt(self):
        """Test that inline data images do not embed their payload."""
        result = HtmlToMarkdown().convert('<p><img src="data:image/png;base64,AAAA" alt="Logo"> text</p>', URL)

        assert "base64" not in result
        assert "Logo" in result

    def test_ignore_images(self):
        """Test the ignore_images option."""
        result = HtmlToMarkdown(ignore_images=True).convert(
            '<p><img src="https://cdn.example.com/d.png" alt="Diagram">Text</p>', URL
        )

        assert "cdn.example.com" not in result

    def test_setext_headings(self):
        """Test the setext heading style."""
        result = HtmlToMarkdown(heading_style="setext").convert("<h1>Title</h1><h2>Sub</h2><h3>Deep</h3>", URL)

        assert "Title\n=====" in result
        assert "Sub\n---" in result
        assert "### Deep" in result

    def test_unknown_heading_style(self):
        """Test that invalid styles are rejected."""
        with pytest.raises(ValueError):
            HtmlToMarkdown(heading_style="underline")

    def test_output_is_deterministic(self):
        """Test that repeated conversions are byte-identical."""
        converter = HtmlToMarkdown()
        html = str(ReadabilityExtractor().extract(HtmlParser().parse(ARTICLE_HTML), URL).content)

        assert converter.convert(html, URL) == converter.convert(html, URL)
        assert HtmlToMarkdown().convert(html, URL) == converter.convert(html, URL)

    def test_single_trailing_newline(self):
        """Test output normalization."""
        result = HtmlToMarkdown().convert("<p>One</p>\n\n\n<p>Two</p>\n\n", URL)

        assert result == "One\n\nTwo\n"
