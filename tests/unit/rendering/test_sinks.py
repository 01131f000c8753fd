from pathlib import Path

from notesite_kit.rendering.base import Page
from notesite_kit.rendering.sinks import DirectorySink, MemorySink


def test_directory_sink_creates_parent_directories(tmp_path: Path) -> None:
    sink = DirectorySink(tmp_path / "site")

    sink.write(Page(path="pages/a.html", content=b"<p>a</p>"))

    assert (tmp_path / "site" / "pages" / "a.html").read_bytes() == b"<p>a</p>"


def test_memory_sink_keeps_pages_by_path() -> None:
    sink = MemorySink()
    page = Page(path="index.html", content=b"x", kind="index")

    sink.write(page)

    assert sink.pages == {"index.html": page}
