"""Pytest configuration and fixtures."""

import httpx
import pytest

from javadoc_harvest.config import Settings

DOCS_ROOT = "https://docs.example.com/en/java/api"


def summary_table(arity: int, rows: list[list[str]], filler: bool = True) -> str:
    """Render a Javadoc div-grid summary table."""
    marker = {2: "two", 3: "three", 4: "four"}[arity]
    headers = ["Modifier and Type", "Method", "Description"][-arity:]
    cells = [f'<div class="table-header col-first">{h}</div>' for h in headers]
    for row in rows:
        cells.extend(f'<div class="col-first even-row-color">{c}</div>' for c in row)
    if filler:
        cells.append('<div class="table-filler"></div>')
    return (
        f'<div class="summary-table {marker}-column-summary">'
        + "".join(cells)
        + "</div>"
    )


def type_page(
    title: str,
    package: str = "java.util",
    module: str = "java.base",
    supertypes: str | None = None,
    fields: str = "",
    constructors: str = "",
    methods: str = "",
) -> str:
    """Render a minimal JDK 17 style type page."""
    clause = (
        f'<div class="type-signature"><span class="extends-implements">'
        f"{supertypes}</span></div>"
        if supertypes is not None
        else ""
    )
    return f"""<html><body>
<div class="header">
<div class="sub-title"><span class="module-label-in-type">Module</span>&nbsp;<a href="../../module-summary.html">{module}</a></div>
<div class="sub-title"><span class="package-label-in-type">Package</span>&nbsp;<a href="package-summary.html">{package}</a></div>
<h1 title="{title}" class="title">{title}</h1>
</div>
<section class="class-description">{clause}</section>
<section class="field-summary">{fields}</section>
<section class="constructor-summary">{constructors}</section>
<section class="method-summary">{methods}</section>
</body></html>"""


class PageTransport(httpx.AsyncBaseTransport):
    """Serve canned pages by URL and record every request."""

    def __init__(self, pages: dict[str, str], statuses: dict[str, int] | None = None):
        self.pages = pages
        self.statuses = statuses or {}
        self.requests: list[str] = []

    async def handle_async_request(self, request):
        url = str(request.url)
        self.requests.append(url)
        if url in self.statuses:
            return httpx.Response(self.statuses[url], text="error")
        if url in self.pages:
            return httpx.Response(200, text=self.pages[url])
        return httpx.Response(404, text="not found")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing the cache and output into a temp directory."""
    return Settings(
        docs_root=DOCS_ROOT,
        cache_dir=str(tmp_path / "cache"),
        output_path=str(tmp_path / "out" / "java_stdlib.json"),
        max_concurrency=4,
        fetch_retries=0,
    )


@pytest.fixture
def hashmap_page():
    """A HashMap-like page with all three summary tables."""
    return type_page(
        "Class HashMap&lt;K,V&gt;",
        supertypes=(
            "extends AbstractMap&lt;K,V&gt;\n"
            "implements Map&lt;K,V&gt;, Cloneable, Serializable"
        ),
        fields=summary_table(
            3, [["static final&nbsp;int", "DEFAULT_SIZE", "Default capacity."]]
        ),
        constructors=summary_table(
            2,
            [
                ["HashMap&#8203;()", "Constructs an empty HashMap."],
                [
                    "HashMap&#8203;(Map&lt;? extends K,? extends V&gt;&nbsp;m)",
                    "Constructs a new HashMap with the same mappings.",
                ],
            ],
        ),
        methods=summary_table(
            3,
            [
                ["V", "put&#8203;(K&nbsp;key, V&nbsp;value)", "Associates a value."],
                ["int", "size()", "Returns the number of mappings."],
            ],
        ),
    )
