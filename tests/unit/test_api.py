"""Unit tests for the functional conversion entry points."""

import pytest

from confluence2md import convert_page, parse_storage, render_storage, resolve_attachments
from confluence2md.constants import PLACEHOLDER_SCHEME
from confluence2md.options import AttachmentResolverOptions, MarkdownRendererOptions
from confluence2md.types import AssetReference, ResolvedAsset

DIAGRAM_PAGE = '<p><ac:image><ri:attachment ri:filename="diagram v2.png" /></ac:image></p>'


@pytest.mark.unit
class TestParseStorage:
    """Test the parse entry point."""

    def test_well_formed(self) -> None:
        """Test that valid markup parses strictly."""
        root, well_formed = parse_storage("<p>Hello</p>")

        assert well_formed is True
        assert root.find("p").text() == "Hello"

    def test_malformed(self) -> None:
        """Test that broken markup falls back without raising."""
        root, well_formed = parse_storage("<p>Hello <strong>World")

        assert well_formed is False
        assert "World" in root.text()


@pytest.mark.unit
class TestRenderStorage:
    """Test the render entry point."""

    def test_heading_and_paragraph(self) -> None:
        """Test a heading followed by an emphasised paragraph."""
        rendered = render_storage("<h1>Title</h1><p>Hello <strong>World</strong></p>")

        assert rendered.text == "# Title\n\nHello **World**\n\n"
        assert rendered.references == ()

    def test_placeholders_and_references(self) -> None:
        """Test that attachments are left as placeholders with references."""
        rendered = render_storage(DIAGRAM_PAGE)

        assert rendered.text == f"![diagram v2.png]({PLACEHOLDER_SCHEME}diagram v2.png)\n\n"
        assert rendered.references == (AssetReference.attachment("diagram v2.png"),)

    def test_renderer_options_passed_through(self) -> None:
        """Test a non-default code fence."""
        rendered = render_storage("<pre>x = 1</pre>", renderer_options=MarkdownRendererOptions(code_fence="~~~"))

        assert rendered.text == "~~~\nx = 1\n~~~\n\n"


@pytest.mark.unit
class TestResolveAttachments:
    """Test the resolve entry point."""

    def test_local_inventory(self) -> None:
        """Test substitution of a downloaded attachment."""
        rendered = render_storage(DIAGRAM_PAGE)
        inventory = [ResolvedAsset(title="diagram v2.png", download_path="/local/diagram_v2.png")]

        result = resolve_attachments(rendered, inventory)

        assert "![diagram v2.png](/local/diagram_v2.png)" in result
        assert PLACEHOLDER_SCHEME not in result

    def test_remote_fallback(self, remote_options) -> None:
        """Test substitution with the download URL template."""
        result = resolve_attachments(render_storage(DIAGRAM_PAGE), resolver_options=remote_options)

        assert result == "![diagram v2.png](https://wiki.example.com/download/attachments/12345/diagram%20v2.png)\n\n"

    def test_unresolved_reference_dropped(self) -> None:
        """Test that unknown attachments leave an empty link target."""
        assert resolve_attachments(render_storage(DIAGRAM_PAGE)) == "![diagram v2.png]()\n\n"


@pytest.mark.unit
class TestConvertPage:
    """Test the one-call conversion."""

    def test_title_heading(self) -> None:
        """Test that the title becomes a level-one heading."""
        assert convert_page("<p>Body</p>", title="Release Notes") == "# Release Notes\n\nBody\n\n"

    def test_without_title(self) -> None:
        """Test that no heading is added without a title."""
        assert convert_page("<p>Body</p>") == "Body\n\n"

    def test_gallery_for_unreferenced_attachments(self, sample_inventory) -> None:
        """Test the attachments section when nothing is referenced inline."""
        result = convert_page("<p>Body</p>", sample_inventory)

        assert result.endswith(
            "## Attachments\n\n![diagram v2.png](./assets/diagram_v2.png)\n\n- [spec.pdf](./assets/spec.pdf)\n"
        )

    def test_gallery_disabled(self, sample_inventory) -> None:
        """Test the emit_gallery option."""
        result = convert_page(
            "<p>Body</p>",
            sample_inventory,
            resolver_options=AttachmentResolverOptions(emit_gallery=False),
        )

        assert result == "Body\n\n"

    def test_malformed_input_gives_text(self) -> None:
        """Test that truncated markup still yields its text."""
        result = convert_page("<h2>Overview</h2><p>Partial <em>content")

        assert result.strip()
        assert "Overview" in result
        assert "content" in result
