"""
Asset resolution for image components.

Image references come in three shapes:
1. A fully-formed inline data URI ("data:...") - passed through unchanged
2. A reference to an external base64 text file ("logo.b64.txt") - looked up
   in a static registry loaded eagerly from the bundle
3. Anything else - treated as raw base64 content and wrapped

A reference that cannot be resolved yields an empty payload, which renders
as an absent image instead of failing the screen.
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from screenspec.schemas.document import ImageComponent

logger = logging.getLogger(__name__)

INLINE_PREFIX = "data:"
BASE64_FILE_SUFFIX = ".b64.txt"
DEFAULT_ASSET_DIRS = ("", "images_base64")
DEFAULT_IMAGE_MIME = "image/png"


class AssetRegistry:
    """Static mapping of bundle-relative path -> base64 text.

    Contents are read once when the registry is built; lookups never touch
    the filesystem.
    """

    def __init__(self, assets: Optional[Mapping[str, str]] = None):
        self._assets: Dict[str, str] = dict(assets or {})

    @classmethod
    def from_directory(
        cls,
        bundle_dir: Path,
        asset_dirs: Sequence[str] = DEFAULT_ASSET_DIRS,
        suffix: str = BASE64_FILE_SUFFIX,
    ) -> "AssetRegistry":
        """Eagerly load every ``*<suffix>`` file found in the asset directories.

        Args:
            bundle_dir: Bundle root; keys are POSIX paths relative to it
            asset_dirs: Sub-directories to scan ("" is the bundle root itself)
            suffix: File suffix of base64 text assets

        Returns:
            Populated registry (empty if nothing was found)
        """
        bundle_dir = Path(bundle_dir)
        assets: Dict[str, str] = {}

        for asset_dir in asset_dirs:
            directory = bundle_dir / asset_dir if asset_dir else bundle_dir
            if not directory.is_dir():
                logger.debug(f"Asset directory not found, skipping: {directory}")
                continue
            for path in sorted(directory.glob(f"*{suffix}")):
                key = path.relative_to(bundle_dir).as_posix()
                try:
                    assets[key] = path.read_text(encoding="utf-8")
                except (UnicodeDecodeError, OSError) as e:
                    logger.warning(f"Skipping unreadable asset {key}: {e}")

        logger.debug(f"Loaded {len(assets)} base64 assets from {bundle_dir}")
        return cls(assets)

    def get(self, key: str) -> Optional[str]:
        return self._assets.get(key)

    def keys(self) -> List[str]:
        return list(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, key: object) -> bool:
        return key in self._assets


class AssetResolver:
    """Maps an image component's ``file`` reference to a displayable payload."""

    def __init__(
        self,
        registry: Optional[AssetRegistry] = None,
        asset_dirs: Sequence[str] = DEFAULT_ASSET_DIRS,
        suffix: str = BASE64_FILE_SUFFIX,
        image_mime: str = DEFAULT_IMAGE_MIME,
    ):
        self.registry = registry or AssetRegistry()
        self.suffix = suffix
        self._prefixes = [f"{d.strip('/')}/" if d else "" for d in asset_dirs]
        self._header = f"data:{image_mime};base64,"

    def candidate_keys(self, reference: str) -> List[str]:
        """Registry keys tried for ``reference``, in order."""
        return [f"{prefix}{reference}" for prefix in self._prefixes]

    def resolve(self, image: ImageComponent) -> str:
        """
        Resolve an image component to a data URI.

        Args:
            image: Image component whose ``file`` holds the reference

        Returns:
            Data URI, or "" when there is no reference or the referenced
            base64 file is not in the registry
        """
        reference = image.file
        if not reference:
            return ""

        if reference.startswith(INLINE_PREFIX):
            return reference

        if reference.endswith(self.suffix):
            for key in self.candidate_keys(reference):
                content = self.registry.get(key)
                if content:
                    return f"{self._header}{content.strip()}"
            logger.warning(f"Base64 asset not found for image '{image.id}': {reference}")
            return ""

        return f"{self._header}{reference}"
