from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

DDRAGON_VERSION = "8.24.1"
DDRAGON_CDN = "https://ddragon.leagueoflegends.com/cdn"


@dataclass(frozen=True)
class Settings:
    endpoint: str = f"{DDRAGON_CDN}/{DDRAGON_VERSION}/data/en_US/champion.json"
    thumbnail_base: str = f"{DDRAGON_CDN}/{DDRAGON_VERSION}/img/champion/"
    portrait_base: str = f"{DDRAGON_CDN}/img/champion/loading/"
    portrait_suffix: str = "_0.jpg"
    request_timeout: float = 10.0
    initial_width: int = 1280
    initial_height: int = 800

    @staticmethod
    def load(path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, dict):
            raise ValueError(f"Expected JSON object in {path}")
        return Settings.from_dict(raw)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(Settings)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return Settings(**raw)
