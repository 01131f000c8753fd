import pytest

from notesite_kit.observability import InMemoryMetricsHook, names
from notesite_kit.parsers.markdown_parser import MarkdownParser, parse_document
from notesite_kit.parsers.models import CodeBlock, Heading, Link, ListItem, Paragraph


class TestHeadings:
    def test_level_is_run_length(self) -> None:
        doc = parse_document("## Pillars\n")

        assert doc.blocks == (Heading(level=2, text="Pillars", slug="pillars"),)

    def test_level_is_clamped_to_six(self) -> None:
        doc = parse_document("######## Deep")

        assert doc.blocks == (Heading(level=6, text="Deep", slug="deep"),)

    def test_closing_hashes_are_dropped(self) -> None:
        doc = parse_document("# Title ##")

        assert doc.blocks[0].text == "Title"

    def test_hash_without_space_is_paragraph(self) -> None:
        doc = parse_document("#hashtag")

        assert doc.blocks == (Paragraph(text="#hashtag"),)

    def test_bare_hash_run_degrades_to_paragraph(self) -> None:
        doc = parse_document("###")

        assert doc.blocks == (Paragraph(text="###"),)

    def test_heading_slug_is_derived_from_text(self) -> None:
        doc = parse_document("# Open/Closed Principle")

        assert doc.blocks[0].slug == "open-closed-principle"


class TestCodeBlocks:
    def test_language_tag_is_kept(self) -> None:
        doc = parse_document("```python\nprint('hi')\n```\n")

        assert doc.blocks == (CodeBlock(language="python", text="print('hi')"),)

    def test_missing_language_tag_is_empty(self) -> None:
        doc = parse_document("```\nx = 1\n```")

        assert doc.blocks == (CodeBlock(language="", text="x = 1"),)

    def test_unterminated_fence_runs_to_end_of_input(self) -> None:
        """An unclosed fence swallows the rest of the file without raising."""
        doc = parse_document("# Title\n```js\nconst a = 1;\n\n# not a heading\n")

        assert doc.blocks == (
            Heading(level=1, text="Title", slug="title"),
            CodeBlock(language="js", text="const a = 1;\n\n# not a heading"),
        )

    def test_fence_only_closes_on_same_character(self) -> None:
        doc = parse_document("~~~\na\n```\nb\n~~~\nafter")

        assert doc.blocks == (
            CodeBlock(language="", text="a\n```\nb"),
            Paragraph(text="after"),
        )

    def test_longer_closing_fence_closes(self) -> None:
        doc = parse_document("```sh\nls\n`````\ntext")

        assert doc.blocks == (CodeBlock(language="sh", text="ls"), Paragraph(text="text"))

    def test_code_lines_are_not_parsed_as_lists_or_links(self) -> None:
        doc = parse_document("```md\n- item\n[x](#y)\n```")

        assert doc.blocks == (CodeBlock(language="md", text="- item\n[x](#y)"),)


class TestLists:
    def test_bullets_and_numbers_with_depth(self) -> None:
        doc = parse_document("- one\n  - nested\n1. first\n2) second")

        assert doc.blocks == (
            ListItem(depth=0, text="one"),
            ListItem(depth=1, text="nested"),
            ListItem(depth=0, text="first", ordered=True),
            ListItem(depth=0, text="second", ordered=True),
        )

    def test_tab_counts_as_four_spaces(self) -> None:
        doc = parse_document("\t* tabbed")

        assert doc.blocks == (ListItem(depth=2, text="tabbed"),)

    def test_list_item_links_are_extracted(self) -> None:
        doc = parse_document("- see [drift](#resource-drift)")

        assert doc.blocks[0].links == (Link(text="drift", target="#resource-drift"),)

    def test_bold_text_is_not_a_list(self) -> None:
        doc = parse_document("**bold** statement")

        assert doc.blocks == (Paragraph(text="**bold** statement"),)


class TestParagraphsAndLinks:
    def test_consecutive_lines_join_into_one_paragraph(self) -> None:
        doc = parse_document("line one\nline two\n\nnext")

        assert doc.blocks == (
            Paragraph(text="line one\nline two"),
            Paragraph(text="next"),
        )

    def test_inline_links_are_extracted(self) -> None:
        doc = parse_document("See [Encapsulation](#encapsulation) and [docs](https://x.io).")

        assert doc.blocks[0].links == (
            Link(text="Encapsulation", target="#encapsulation"),
            Link(text="docs", target="https://x.io"),
        )

    def test_links_inside_code_spans_are_not_extracted(self) -> None:
        doc = parse_document("Write `[text](#anchor)` to link, or see [B](#b).")

        assert doc.blocks[0].links == (Link(text="B", target="#b"),)

    def test_list_item_code_span_hides_links(self) -> None:
        doc = parse_document("- use ``[a](#x)`` literally")

        assert doc.blocks[0].links == ()

    def test_line_with_only_a_link_is_a_link_block(self) -> None:
        doc = parse_document("[Back to top](#pillars)")

        assert doc.blocks == (Link(text="Back to top", target="#pillars"),)

    def test_images_are_not_links(self) -> None:
        doc = parse_document("![diagram](img.png)")

        assert doc.blocks == (Paragraph(text="![diagram](img.png)"),)

    def test_link_properties(self) -> None:
        internal = Link(text="x", target="#abc")
        external = Link(text="x", target="https://example.com")

        assert internal.is_internal and internal.anchor == "abc"
        assert not external.is_internal and external.anchor == ""

    def test_crlf_line_endings_are_normalized(self) -> None:
        doc = parse_document("# A\r\nbody\r\n")

        assert doc.blocks == (
            Heading(level=1, text="A", slug="a"),
            Paragraph(text="body"),
        )


class TestParserBehaviour:
    def test_empty_input_gives_empty_document(self) -> None:
        assert parse_document("").blocks == ()

    def test_malformed_input_never_raises(self) -> None:
        doc = parse_document("[broken](\n#\n- \n```\n#")

        assert isinstance(doc.blocks[-1], CodeBlock)

    def test_source_id_is_recorded(self) -> None:
        doc = MarkdownParser().parse("# A", source_id="notes/oop.md")

        assert doc.source_id == "notes/oop.md"

    def test_parsing_is_deterministic(self) -> None:
        text = "# A\n- x\n```py\ny = 2\n```\n[l](#a)\n"

        assert parse_document(text) == parse_document(text)

    def test_document_is_frozen(self) -> None:
        doc = parse_document("# A")

        with pytest.raises(AttributeError):
            doc.source_id = "other"  # type: ignore

    def test_records_metrics(self) -> None:
        hook = InMemoryMetricsHook()

        MarkdownParser(metrics_hook=hook).parse("# A\ntext")

        assert hook.counters[names.PARSE_DOCUMENTS_TOTAL] == 1
        assert hook.counters[names.PARSE_BLOCKS_TOTAL] == 2
        assert len(hook.latencies[names.PARSE_DURATION]) == 1
