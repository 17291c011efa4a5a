"""Asset Bundle Provider Driven Port"""

from pathlib import Path
from typing import Protocol

from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleMap


class AssetBundleProviderPort(Protocol):
    """Loads the asset → bundle mapping evaluated by the CLI"""

    def load_bundles(self, path: Path) -> AssetBundleMap:
        """Raises InvalidBundleFileError for a missing / malformed source"""
        ...
