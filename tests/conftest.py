"""Pytest configuration and shared fixtures for the confluence2md test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from confluence2md.options import AttachmentResolverOptions
from confluence2md.parsers import StorageParser
from confluence2md.renderers import StorageMarkdownRenderer
from confluence2md.types import RenderResult, ResolvedAsset

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def documents_dir() -> Path:
    """Directory holding the storage-format fixture documents."""
    return FIXTURES_DIR / "documents"


@pytest.fixture
def render():
    """Parse and render storage markup, returning the RenderResult."""

    def _render(raw: str, renderer_options=None) -> RenderResult:
        root, _ = StorageParser().parse(raw)
        return StorageMarkdownRenderer(renderer_options).render(root)

    return _render


@pytest.fixture
def sample_inventory() -> list[ResolvedAsset]:
    """Inventory with one downloaded image and one downloaded PDF."""
    return [
        ResolvedAsset(title="diagram v2.png", download_path="./assets/diagram_v2.png", content_type="image/png"),
        ResolvedAsset(title="spec.pdf", download_path="./assets/spec.pdf", content_type="application/pdf"),
    ]


@pytest.fixture
def remote_options() -> AttachmentResolverOptions:
    """Resolver options with the remote download URL fallback enabled."""
    return AttachmentResolverOptions(base_url="https://wiki.example.com", page_id="12345")
