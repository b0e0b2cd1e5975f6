"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

import html2text
from bs4 import BeautifulSoup, NavigableString, Tag

logger = logging.getLogger(__name__)

# Class name prefixes that carry a code block's language
LANGUAGE_CLASS_PATTERN = re.compile(r"^(?:language|lang|highlight-source|highlight)-([\w+#.-]+)$")

CODE_PLACEHOLDER = "LINECLIPCODEBLOCK{index}END"
CODE_PLACEHOLDER_PATTERN = re.compile(r"^(.*?)LINECLIPCODEBLOCK(\d+)END[ \t]*$", re.MULTILINE)

HEADING_STYLES = ("atx", "setext")


def _code_language(pre: Tag) -> str:
    """Return the language hint declared on a <pre> or its <code> child."""
    candidates = [pre]
    code = pre.find("code")
    if isinstance(code, Tag):
        candidates.append(code)

    for element in candidates:
        for class_name in element.get("class") or []:
            match = LANGUAGE_CLASS_PATTERN.match(class_name)
            if match:
                return match.group(1).lower()
    return ""


def _fence_for(code: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", code)), default=0)
    return "`" * max(3, longest + 1)


class HtmlToMarkdown:
    """
    Converts HTML content to clean Markdown.

    Uses html2text for the document structure. Preformatted blocks are
    lifted out before conversion and written back as fenced code blocks
    with their language hint, since html2text only knows indented code.

    Images become ``![alt](absolute-url)``; inline ``data:`` images are
    reduced to their alt text. The output is a pure function of the input
    HTML and URL.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://docs.example.com/page")
    """

    def __init__(
        self,
        heading_style: str = "atx",
        body_width: int = 0,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        escape_snob: bool = False,
    ):
        """
        Initialize the Markdown converter.

        Args:
            heading_style: "atx" (# Title) or "setext" (underlined h1/h2)
            body_width: Max line width (0 = no wrapping)
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            escape_snob: Escape special Markdown chars
        """
        if heading_style not in HEADING_STYLES:
            raise ValueError(f"Unknown heading style: {heading_style!r}")

        self._heading_style = heading_style
        self._body_width = body_width
        self._ignore_images = ignore_images
        self._ignore_tables = ignore_tables
        self._unicode_snob = unicode_snob
        self._escape_snob = escape_snob

    def _new_converter(self, url: str) -> html2text.HTML2Text:
        """Build a fresh html2text instance; instances keep parse state."""
        converter = html2text.HTML2Text(baseurl=url, bodywidth=self._body_width)

        # Link handling
        converter.inline_links = True
        converter.wrap_links = False
        converter.protect_links = False

        # Content handling
        converter.ignore_images = self._ignore_images
        converter.ignore_tables = self._ignore_tables
        converter.unicode_snob = self._unicode_snob
        converter.escape_snob = self._escape_snob
        converter.mark_code = False
        converter.default_image_alt = ""
        converter.single_line_break = False

        return converter

    def _lift_code_blocks(self, html: str) -> tuple[str, list[str]]:
        """Replace every <pre> with a placeholder paragraph and render it as a fence."""
        soup = BeautifulSoup(html, "html.parser")
        blocks: list[str] = []

        pre = soup.find("pre")
        while isinstance(pre, Tag):
            code = pre.get_text()
            if code.startswith("\n"):
                code = code[1:]
            code = code.rstrip("\n")

            fence = _fence_for(code)
            blocks.append(f"{fence}{_code_language(pre)}\n{code}\n{fence}")

            placeholder = soup.new_tag("p")
            placeholder.string = CODE_PLACEHOLDER.format(index=len(blocks) - 1)
            pre.replace_with(placeholder)

            pre = soup.find("pre")

        for img in soup.find_all("img"):
            src = img.get("src") or ""
            if isinstance(src, str) and src.startswith("data:"):
                img.replace_with(NavigableString(img.get("alt") or ""))

        return str(soup), blocks

    def _insert_code_blocks(self, markdown: str, blocks: list[str]) -> str:
        def replace_block(match: re.Match[str]) -> str:
            prefix = match.group(1)
            lines = blocks[int(match.group(2))].split("\n")

            # List item marker: fence opens on the marker line, body is indented under it
            if prefix.strip(" \t>"):
                indent = " " * len(prefix)
                rest = [indent + line if line else "" for line in lines[1:]]
                return "\n".join([prefix + lines[0], *rest])

            return "\n".join(prefix + line if line else prefix.rstrip() for line in lines)

        return CODE_PLACEHOLDER_PATTERN.sub(replace_block, markdown)

    def _to_setext(self, markdown: str) -> str:
        def replace_heading(match: re.Match[str]) -> str:
            text = match.group(2).strip()
            underline = "=" if len(match.group(1)) == 1 else "-"
            return f"{text}\n{underline * max(3, len(text))}"

        return re.sub(r"^(#{1,2}) (.+?)\s*#*$", replace_heading, markdown, flags=re.MULTILINE)

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        return re.sub(r"\n{3,}", "\n\n", markdown)

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            # Skip anchors and already absolute URLs
            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links

        Returns:
            Markdown string ending in a single newline (empty content gives "\\n")
        """
        prepared, blocks = self._lift_code_blocks(html)

        markdown = self._new_converter(url).handle(prepared)
        markdown = self._clean_output(markdown)
        markdown = self._fix_relative_links(markdown, url)
        if self._heading_style == "setext":
            markdown = self._to_setext(markdown)

        # Code goes back in last so cleanup never touches its whitespace
        markdown = self._insert_code_blocks(markdown, blocks)

        logger.debug(f"Converted {len(html)} chars of HTML from {url} to {len(markdown)} chars of Markdown")
        return markdown.strip() + "\n"
