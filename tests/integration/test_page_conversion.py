"""Integration tests converting complete storage-format pages."""

import pytest

from confluence2md import (
    AttachmentResolver,
    AttachmentResolverOptions,
    MarkdownRendererOptions,
    ResolvedAsset,
    StorageMarkdownRenderer,
    StorageParser,
    convert_page,
)
from confluence2md.constants import PLACEHOLDER_SCHEME
from confluence2md.types import AssetReference


def _read(documents_dir, name: str) -> str:
    return (documents_dir / name).read_text(encoding="utf-8")


@pytest.mark.integration
class TestPageWithAttachments:
    """Test the two-phase flow on a page embedding several attachments."""

    def test_render_phase(self, documents_dir) -> None:
        """Test placeholders and references before resolution."""
        root, well_formed = StorageParser().parse(_read(documents_dir, "page_with_attachments.xml"))
        rendered = StorageMarkdownRenderer().render(root)

        assert well_formed is True
        assert rendered.text == (
            "# Release Plan\n\n"
            "The architecture is shown below.\n\n"
            "![Architecture](ATTACH://diagram v2.png)\n\n"
            "Download the [full specification](ATTACH://spec.pdf) for details.\n\n"
            "![budget,final.xlsx](ATTACH://budget,final.xlsx)\n\n"
            "Reviewed by the platform team.\n\n\n\n"
            "See [the roadmap](https://example.com/roadmap).\n\n"
        )
        assert rendered.references == (
            AssetReference.attachment("diagram v2.png"),
            AssetReference.attachment("spec.pdf"),
            AssetReference.attachment("budget,final.xlsx"),
        )

    def test_resolution_phase(self, documents_dir, remote_options) -> None:
        """Test local, remote and sanitized-name matches together."""
        root, _ = StorageParser().parse(_read(documents_dir, "page_with_attachments.xml"))
        rendered = StorageMarkdownRenderer().render(root)
        inventory = [
            ResolvedAsset(title="diagram v2.png", download_path="./assets/diagram_v2.png", content_type="image/png"),
            ResolvedAsset(title="spec.pdf", download_path="./assets/spec.pdf"),
            ResolvedAsset(title="budget_final.xlsx", download_url="/download/attachments/12345/budget_final.xlsx"),
        ]

        resolver = AttachmentResolver(remote_options)
        replacements = resolver.build_replacements(rendered.references, inventory)
        markdown = resolver.apply(rendered.text, replacements, inventory)

        assert [r.target for r in replacements] == [
            "./assets/diagram_v2.png",
            "./assets/spec.pdf",
            "https://wiki.example.com/download/attachments/12345/budget_final.xlsx",
        ]
        assert "![Architecture](./assets/diagram_v2.png)" in markdown
        assert "[full specification](./assets/spec.pdf)" in markdown
        assert "![budget,final.xlsx](https://wiki.example.com/download/attachments/12345/budget_final.xlsx)" in markdown
        assert PLACEHOLDER_SCHEME not in markdown
        assert "## Attachments" not in markdown

    def test_unavailable_attachments_dropped(self, documents_dir, caplog) -> None:
        """Test that nothing dangles without an inventory or fallback."""
        with caplog.at_level("WARNING", logger="confluence2md.resolver"):
            markdown = convert_page(_read(documents_dir, "page_with_attachments.xml"))

        assert "![Architecture]()" in markdown
        assert PLACEHOLDER_SCHEME not in markdown
        assert caplog.text.count("could not be resolved") == 3


@pytest.mark.integration
class TestTablePage:
    """Test a page dominated by a table."""

    def test_default_rendering(self, documents_dir) -> None:
        """Test table, list and code block output."""
        markdown = convert_page(_read(documents_dir, "table_page.xml"))

        assert markdown == (
            "## Owners\n\n"
            "| Component | Owner | Notes |\n"
            "| --- | --- | --- |\n"
            "| Parser<br/> | **Ana** | Handles a\\|b splits<br/>Second line<br/> |\n"
            "| Renderer | *Ben* | - tables<br/>- lists |\n\n"
            "1. First\n2. Second\n\n"
            "```\nfor row in table:\n    render(row)\n```\n\n"
        )

    def test_strip_trailing_cell_breaks(self, documents_dir) -> None:
        """Test the option removing edge breaks in cells."""
        markdown = convert_page(
            _read(documents_dir, "table_page.xml"),
            renderer_options=MarkdownRendererOptions(strip_trailing_cell_breaks=True),
        )

        assert "| Parser | **Ana** | Handles a\\|b splits<br/>Second line |\n" in markdown


@pytest.mark.integration
class TestMalformedPage:
    """Test best-effort conversion of markup that is not well-formed."""

    def test_fallback_keeps_text_and_references(self, documents_dir) -> None:
        """Test that the HTML fallback still finds content and attachments."""
        root, well_formed = StorageParser().parse(_read(documents_dir, "malformed_page.xml"))
        rendered = StorageMarkdownRenderer().render(root)

        assert well_formed is False
        assert "# Meeting notes" in rendered.text
        assert "Ship parser" in rendered.text
        assert AssetReference.attachment("whiteboard.jpg") in rendered.references

    def test_fallback_resolves_attachments(self, documents_dir) -> None:
        """Test that resolution works on a fallback tree."""
        markdown = convert_page(
            _read(documents_dir, "malformed_page.xml"),
            [ResolvedAsset(title="whiteboard.jpg", download_path="./assets/whiteboard.jpg")],
            resolver_options=AttachmentResolverOptions(emit_gallery=False),
        )

        assert "(./assets/whiteboard.jpg)" in markdown
        assert PLACEHOLDER_SCHEME not in markdown


@pytest.mark.integration
class TestDeeplyNestedPage:
    """Test conversion of pages nested deeper than the recursion limit."""

    depth = 1500

    def test_strict_path(self) -> None:
        raw = "<div>" * self.depth + "<p>deep</p>" + "</div>" * self.depth

        assert convert_page(raw).strip() == "deep"

    def test_fallback_path(self) -> None:
        """Test the HTML fallback, forced by an entity undefined in XML."""
        raw = "<div>" * self.depth + "<p>deep&nbsp;end</p>" + "</div>" * self.depth
        _, well_formed = StorageParser().parse(raw)

        assert well_formed is False
        assert convert_page(raw).strip() == "deep\xa0end"

    def test_deep_attachment_resolved(self) -> None:
        image = '<p><ac:image><ri:attachment ri:filename="deep.png" /></ac:image></p>'
        raw = "<div>" * self.depth + image + "&nbsp;" + "</div>" * self.depth
        markdown = convert_page(raw, [ResolvedAsset(title="deep.png", download_path="./assets/deep.png")])

        assert "![deep.png](./assets/deep.png)" in markdown
        assert PLACEHOLDER_SCHEME not in markdown


@pytest.mark.integration
class TestPipeNamedAttachmentInTable:
    """Test an attachment whose name contains a pipe, embedded in a table cell."""

    raw = (
        "<table><tr><th>Preview</th></tr>"
        '<tr><td><ac:image><ri:attachment ri:filename="a|b.png" /></ac:image></td></tr></table>'
    )

    def test_resolved_in_place(self) -> None:
        markdown = convert_page(
            self.raw,
            [ResolvedAsset(title="a|b.png", download_path="./assets/a_b.png")],
            renderer_options=MarkdownRendererOptions(render_embeds_in_tables=True),
        )

        assert markdown == "| Preview |\n| --- |\n| ![a\\|b.png](./assets/a_b.png) |\n\n"

    def test_replacement_matches_reference(self) -> None:
        root, _ = StorageParser().parse(self.raw)
        rendered = StorageMarkdownRenderer(MarkdownRendererOptions(render_embeds_in_tables=True)).render(root)
        replacements = AttachmentResolver().build_replacements(
            rendered.references, [ResolvedAsset(title="a|b.png", download_path="./assets/a_b.png")]
        )

        assert rendered.references == (AssetReference.attachment("a|b.png"),)
        assert replacements[0].original_name == "a|b.png"
        assert PLACEHOLDER_SCHEME + replacements[0].original_name in rendered.text
