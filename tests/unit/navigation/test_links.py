import pytest

from notesite_kit.errors import AmbiguousLinkError, DanglingLinkError
from notesite_kit.merging.merger import merge
from notesite_kit.navigation.links import find_link_errors, resolve_links
from notesite_kit.navigation.toc import TocNode, build_toc
from notesite_kit.observability import InMemoryMetricsHook, names
from notesite_kit.parsers.markdown_parser import parse_document


def _canonical(*texts: str):
    return merge([parse_document(text, f"{i}.md") for i, text in enumerate(texts)])


def test_dangling_link_names_the_missing_slug() -> None:
    canonical = _canonical("# A\nsee [x](#nonexistent-slug)\n")

    with pytest.raises(DanglingLinkError, match="nonexistent-slug") as exc_info:
        resolve_links(canonical, build_toc(canonical))

    error = exc_info.value
    assert error.slug == "nonexistent-slug"
    assert error.link_text == "x"
    assert error.heading_path == ("A",)
    assert error.sources == ("0.md",)


def test_valid_links_resolve() -> None:
    canonical = _canonical("# A\n## Deep\n# B\n[to a](#a) and [deep](#deep)\n")

    table = resolve_links(canonical, build_toc(canonical))

    assert "a" in table and "deep" in table
    assert table.get("deep").heading_path == ("A", "Deep")
    assert table.get("a").section is canonical.sections[0]
    assert table.slugs() == ["a", "deep", "b"]


def test_external_links_are_ignored() -> None:
    canonical = _canonical("# A\n[site](https://example.com) [file](other.md#x)\n")

    table = resolve_links(canonical, build_toc(canonical))

    assert len(table) == 1


def test_links_in_list_items_and_link_lines_are_checked() -> None:
    canonical = _canonical("# A\n- [one](#missing-one)\n[two](#missing-two)\n")

    errors = find_link_errors(canonical, build_toc(canonical))

    assert [e.slug for e in errors] == ["missing-one", "missing-two"]
    assert all(isinstance(e, DanglingLinkError) for e in errors)


def test_duplicate_section_reports_every_source() -> None:
    canonical = _canonical("# A\n[x](#gone)\n", "# A\n[x](#gone)\n")

    errors = find_link_errors(canonical, build_toc(canonical))

    assert len(errors) == 1
    assert errors[0].sources == ("0.md", "1.md")


def test_ambiguous_slug_is_reported() -> None:
    canonical = _canonical("# A\n[x](#dup)\n# B\n")
    toc = TocNode(
        title="Contents",
        slug="",
        heading_path=(),
        children=(
            TocNode(title="A", slug="dup", heading_path=("A",)),
            TocNode(title="B", slug="dup", heading_path=("B",)),
        ),
    )

    with pytest.raises(AmbiguousLinkError, match="dup"):
        resolve_links(canonical, toc)


def test_unknown_slug_lookup_raises_keyerror() -> None:
    canonical = _canonical("# A\n")
    table = resolve_links(canonical, build_toc(canonical))

    with pytest.raises(KeyError, match="not found"):
        table.get("zzz")


def test_records_link_error_metrics() -> None:
    hook = InMemoryMetricsHook()
    canonical = _canonical("# A\n[x](#nope) [y](#nada)\n")

    with pytest.raises(DanglingLinkError):
        resolve_links(canonical, build_toc(canonical), metrics_hook=hook)

    assert hook.counters[names.LINK_ERRORS_TOTAL] == 2


def test_link_syntax_inside_code_span_is_not_resolved() -> None:
    canonical = _canonical("# Links\nWrite `[text](#anchor)` to link.\n")

    table = resolve_links(canonical, build_toc(canonical))

    assert table.slugs() == ["links"]
