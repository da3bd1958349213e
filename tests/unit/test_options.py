"""Unit tests for the frozen options dataclasses."""

import dataclasses

import pytest

from confluence2md.options import (
    AttachmentResolverOptions,
    MarkdownRendererOptions,
    StorageParserOptions,
)


@pytest.mark.unit
class TestStorageParserOptions:
    """Test parser option defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = StorageParserOptions()

        assert options.content_namespace == "http://atlassian.com/content"
        assert options.resource_namespace == "http://atlassian.com/resource"
        assert options.html_parser == "html.parser"
        assert options.strip_null_bytes is True

    def test_unknown_html_parser_rejected(self) -> None:
        """Test parser name validation."""
        with pytest.raises(ValueError, match="html_parser"):
            StorageParserOptions(html_parser="regex")

    def test_empty_namespace_rejected(self) -> None:
        """Test namespace validation."""
        with pytest.raises(ValueError):
            StorageParserOptions(content_namespace="")

    def test_frozen(self) -> None:
        """Test immutability."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            StorageParserOptions().html_parser = "lxml"

    def test_help_metadata(self) -> None:
        """Test that every field documents itself for the CLI."""
        for field in dataclasses.fields(StorageParserOptions):
            assert field.metadata.get("help")


@pytest.mark.unit
class TestMarkdownRendererOptions:
    """Test renderer option defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = MarkdownRendererOptions()

        assert options.code_fence == "```"
        assert options.attachment_link_text == "attachment"
        assert options.image_macros == ("image", "thumbnail", "view-file")
        assert options.strip_trailing_cell_breaks is False
        assert options.render_embeds_in_tables is False

    @pytest.mark.parametrize("fence", ["``", "`~`", "'''", ""])
    def test_invalid_fences(self, fence) -> None:
        """Test fence validation."""
        with pytest.raises(ValueError):
            MarkdownRendererOptions(code_fence=fence)

    def test_image_macros_normalized(self) -> None:
        """Test that macro names are lower-cased into a tuple."""
        assert MarkdownRendererOptions(image_macros=["Image", "GALLERY"]).image_macros == ("image", "gallery")

    def test_image_macros_string_rejected(self) -> None:
        """Test that a bare string is not mistaken for a sequence of names."""
        with pytest.raises(ValueError):
            MarkdownRendererOptions(image_macros="image")

    def test_create_updated(self) -> None:
        """Test cloning with changes."""
        original = MarkdownRendererOptions()
        updated = original.create_updated(code_fence="~~~")

        assert updated.code_fence == "~~~"
        assert original.code_fence == "```"
        assert updated.image_macros == original.image_macros

    def test_create_updated_validates(self) -> None:
        """Test that clones are validated too."""
        with pytest.raises(ValueError):
            MarkdownRendererOptions().create_updated(code_fence="x")


@pytest.mark.unit
class TestAttachmentResolverOptions:
    """Test resolver option defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = AttachmentResolverOptions()

        assert options.base_url is None
        assert options.page_id is None
        assert options.emit_gallery is True
        assert options.gallery_heading == "Attachments"
        assert options.has_remote_fallback is False

    def test_base_url_trailing_slash_stripped(self) -> None:
        """Test base URL normalization."""
        assert AttachmentResolverOptions(base_url="https://wiki.example.com//").base_url == "https://wiki.example.com"

    def test_remote_fallback_requires_both_settings(self) -> None:
        """Test the has_remote_fallback property."""
        assert AttachmentResolverOptions(base_url="https://w", page_id="1").has_remote_fallback is True
        assert AttachmentResolverOptions(base_url="https://w").has_remote_fallback is False

    def test_template_requires_filename(self) -> None:
        """Test template validation."""
        with pytest.raises(ValueError, match="filename"):
            AttachmentResolverOptions(download_url_template="{base_url}/x")

    def test_image_extensions_lowercased(self) -> None:
        """Test extension normalization."""
        assert AttachmentResolverOptions(image_extensions=(".PNG",)).image_extensions == (".png",)
