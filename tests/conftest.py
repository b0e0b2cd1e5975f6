"""Shared fixtures for lineclip tests."""

from typing import Optional, Union

import pytest
from lineclip.exceptions import FetchError
from lineclip.http.protocols import HttpResponse


class StubHttpClient:
    """HttpClient serving canned responses and recording every request."""

    def __init__(self, responses: Optional[dict[str, Union[HttpResponse, Exception]]] = None):
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    async def get(self, url: str) -> HttpResponse:
        self.calls.append(url)
        if url not in self.responses:
            raise FetchError(url, "Connection refused")
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def html_response(body: str, status: int = 200, url: str = "") -> HttpResponse:
    return HttpResponse(
        status_code=status,
        content=body.encode("utf-8"),
        content_type="text/html; charset=utf-8",
        url=url,
    )


def text_response(body: str, status: int = 200) -> HttpResponse:
    return HttpResponse(
        status_code=status,
        content=body.encode("utf-8"),
        content_type="text/plain; charset=utf-8",
    )


ARTICLE_HTML = """<html>
<head><title>Understanding Widgets | Acme Blog</title></head>
<body>
    <nav><a href="/">Home</a> <a href="/about">About</a> <a href="/blog">Blog</a></nav>
    <article>
        <h1>Understanding Widgets</h1>
        <p>Widgets are small, composable units that do one thing well. This post walks
        through how they are built, tested and shipped to production at Acme.</p>
        <p>Every widget starts as a sketch. We keep the sketch next to the code so the
        intent of the design never gets lost, even years after the first release.</p>
        <h2>Getting started</h2>
        <ul><li>Install the toolkit</li><li>Create a widget</li></ul>
        <p>Read the <a href="/docs/widgets">widget guide</a> for the full reference, or
        jump straight into the examples, which cover the most common use cases.</p>
        <pre><code class="language-python">import widgets

widgets.build()</code></pre>
    </article>
    <footer>Copyright Acme Corp. All rights reserved.</footer>
</body>
</html>"""


@pytest.fixture
def stub_client():
    """Empty stub client; tests register responses on .responses."""
    return StubHttpClient()
