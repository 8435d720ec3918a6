"""Asset loading entry point."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from roguerun.rewards.gacha import GachaCatalog

ASSETS_ROOT = Path(__file__).resolve().parent


class ContentManager:
    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = root or ASSETS_ROOT
        self.gacha = GachaCatalog()

    def load(self) -> "ContentManager":
        self.gacha.load_directory(self.root / "data" / "items")
        return self


def load_gacha_catalog(root: Optional[Path] = None) -> GachaCatalog:
    return ContentManager(root).load().gacha


__all__ = ["ContentManager", "load_gacha_catalog", "ASSETS_ROOT"]
