#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/resolver.py
"""Substitution of ``ATTACH://`` placeholders after assets are known.

Rendering leaves a placeholder token wherever an attachment was embedded.
Once the caller has listed (and possibly downloaded) the page attachments,
:class:`AttachmentResolver` matches every distinct attachment name against
that inventory and replaces its tokens with the local path, a remote URL, or
nothing.

A token may spell the name in any of three forms (as written, sanitized, or
percent-encoded), so all three are substituted with the same target.
Resolution is total: no ``ATTACH://`` text survives it.

"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Sequence

from confluence2md.constants import PLACEHOLDER_SCHEME
from confluence2md.exceptions import InvalidOptionsError
from confluence2md.options.resolver import AttachmentResolverOptions
from confluence2md.types import AssetReference, AttachmentReplacement, ResolvedAsset
from confluence2md.utils.attachments import (
    attachment_reference_names,
    encode_name,
    fallback_download_url,
    is_image_asset,
    remote_url_for,
    sanitize_filename,
)

logger = logging.getLogger(__name__)

_STRAY_PLACEHOLDER = re.compile(re.escape(PLACEHOLDER_SCHEME) + r"[^)\s]*")


class AttachmentResolver:
    """Resolve attachment placeholders against an asset inventory.

    Parameters
    ----------
    options : AttachmentResolverOptions or None, default = None
        Resolver configuration (remote URL fallback, gallery)

    Examples
    --------
        >>> from confluence2md.types import AssetReference, ResolvedAsset
        >>> resolver = AttachmentResolver()
        >>> resolver.resolve(
        ...     "![a.png](ATTACH://a.png)",
        ...     [AssetReference.attachment("a.png")],
        ...     [ResolvedAsset(title="a.png", download_path="./assets/a.png")],
        ... )
        '![a.png](./assets/a.png)'

    """

    def __init__(self, options: AttachmentResolverOptions | None = None):
        """Initialize the resolver with options."""
        if options is not None and not isinstance(options, AttachmentResolverOptions):
            raise InvalidOptionsError(
                converter_name="attachment resolver",
                expected_type=AttachmentResolverOptions,
                received_type=type(options),
            )
        self.options = options or AttachmentResolverOptions()

    def build_replacements(
        self,
        references: Iterable[AssetReference],
        inventory: Sequence[ResolvedAsset],
    ) -> list[AttachmentReplacement]:
        """Decide the target of every distinct attachment reference.

        Parameters
        ----------
        references : iterable of AssetReference
            References from the render phase; duplicates and external
            references are ignored
        inventory : sequence of ResolvedAsset
            Assets known to exist, in listing order

        Returns
        -------
        list of AttachmentReplacement
            One entry per distinct attachment name, in first-seen order

        """
        replacements = []
        for name in attachment_reference_names(references):
            sanitized = sanitize_filename(name)
            asset = self.match_asset(name, inventory)
            if asset is not None:
                local_path = asset.download_path
                remote_url = remote_url_for(asset, self.options)
            else:
                local_path = None
                remote_url = fallback_download_url(self.options, name)

            replacement = AttachmentReplacement(
                original_name=name,
                sanitized_name=sanitized,
                encoded_name=encode_name(name),
                local_path=local_path,
                remote_url=remote_url,
                asset=asset,
            )
            if replacement.local_path:
                logger.debug("Attachment %r resolved to %s", name, replacement.local_path)
            elif replacement.remote_url:
                logger.warning("Attachment %r not available locally, linking to %s", name, replacement.remote_url)
            else:
                logger.warning("Attachment %r could not be resolved, dropping its reference", name)
            replacements.append(replacement)
        return replacements

    @staticmethod
    def match_asset(name: str, inventory: Sequence[ResolvedAsset]) -> Optional[ResolvedAsset]:
        """Find the inventory asset for a name: exact title first, then sanitized title."""
        for asset in inventory:
            if asset.title == name:
                return asset
        sanitized = sanitize_filename(name)
        for asset in inventory:
            if sanitize_filename(asset.title) == sanitized:
                return asset
        return None

    def resolve(
        self,
        text: str,
        references: Iterable[AssetReference],
        inventory: Iterable[ResolvedAsset] = (),
    ) -> str:
        """Substitute placeholders and append the attachments gallery if needed.

        Parameters
        ----------
        text : str
            Rendered Markdown containing placeholder tokens
        references : iterable of AssetReference
            References from the render phase
        inventory : iterable of ResolvedAsset, default ()
            Assets available to the caller

        Returns
        -------
        str
            Markdown with no ``ATTACH://`` tokens left

        """
        inventory = list(inventory)
        return self.apply(text, self.build_replacements(references, inventory), inventory)

    def apply(
        self,
        text: str,
        replacements: Sequence[AttachmentReplacement],
        inventory: Sequence[ResolvedAsset] = (),
    ) -> str:
        """Apply precomputed replacements, then the gallery and the final sweep.

        Callers that report on :meth:`build_replacements` use this to avoid
        matching the inventory twice.
        """
        text = self.substitute(text, replacements)

        if self.options.emit_gallery and not replacements and inventory:
            text += self.render_gallery(inventory)

        return self.sweep(text)

    @staticmethod
    def substitute(text: str, replacements: Sequence[AttachmentReplacement]) -> str:
        """Replace the placeholder tokens of every replacement in one pass.

        Original spellings take precedence over sanitized and encoded ones
        when two names share a form. Longer tokens are matched first so a
        name never matches the prefix of another.
        """
        targets: dict[str, str] = {}
        for form_index in range(3):
            for replacement in replacements:
                form = replacement.placeholder_forms[form_index]
                if form:
                    targets.setdefault(PLACEHOLDER_SCHEME + form, replacement.target)
        if not targets:
            return text

        pattern = re.compile("|".join(re.escape(token) for token in sorted(targets, key=len, reverse=True)))
        return pattern.sub(lambda match: targets[match.group(0)], text)

    @staticmethod
    def sweep(text: str) -> str:
        """Remove placeholder tokens that no reference accounted for."""
        text, count = _STRAY_PLACEHOLDER.subn("", text)
        if count:
            logger.warning("Removed %d unresolved placeholder token(s)", count)
        return text

    def render_gallery(self, inventory: Iterable[ResolvedAsset]) -> str:
        """Render the attachments section listing every inventory asset.

        Images are embedded, other files become list links. Assets with
        neither a local path nor a remote URL are left out.
        """
        parts = [f"\n\n## {self.options.gallery_heading}\n\n"]
        for asset in inventory:
            href = asset.download_path or remote_url_for(asset, self.options) or ""
            if not href:
                logger.debug("Leaving %r out of the attachments section: no link available", asset.title)
                continue
            if is_image_asset(asset, self.options.image_extensions):
                parts.append(f"![{asset.title}]({href})\n\n")
            else:
                parts.append(f"- [{asset.title}]({href})\n")
        return "".join(parts)
