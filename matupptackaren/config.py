"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_BASE_URL = "https://world.openfoodfacts.org"
DEFAULT_USER_AGENT = "SvenskMatupptackaren/1.0"


@dataclass(frozen=True)
class LookupConfig:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10.0
    page_size: int = 50
    batch_size: int = 5
    batch_delay: float = 0.1


@dataclass(frozen=True)
class LocaleConfig:
    language: str = "sv"
    unknown_name: str = "Okänd produkt"


@dataclass(frozen=True)
class MeasurementConfig:
    glass_ml: float = 250.0
    teaspoon_g: float = 5.0
    tablespoon_g: float = 15.0
    spoonable_volume_ml: float = 100.0
    cooked_volume_ml: float = 200.0
    dry_volume_ml: float = 100.0


@dataclass(frozen=True)
class ExportConfig:
    delimiter: str = ","
    filename: str = "swedish-food-products.csv"


@dataclass(frozen=True)
class AppConfig:
    lookup: LookupConfig = field(default_factory=LookupConfig)
    locale: LocaleConfig = field(default_factory=LocaleConfig)
    measurements: MeasurementConfig = field(default_factory=MeasurementConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The API base URL and User-Agent can be overridden via environment
    variables when the file does not set them.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    lkp = raw.get("lookup", {})
    loc = raw.get("locale", {})
    msr = raw.get("measurements", {})
    exp = raw.get("export", {})

    # Resolve endpoint settings: config file → environment variable → default
    base_url = lkp.get("base_url", "") or os.environ.get(
        "OFF_BASE_URL", DEFAULT_BASE_URL
    )
    user_agent = lkp.get("user_agent", "") or os.environ.get(
        "OFF_USER_AGENT", DEFAULT_USER_AGENT
    )

    defaults = MeasurementConfig()

    return AppConfig(
        lookup=LookupConfig(
            base_url=base_url.rstrip("/"),
            user_agent=user_agent,
            timeout=float(lkp.get("timeout", 10.0)),
            page_size=int(lkp.get("page_size", 50)),
            batch_size=max(1, int(lkp.get("batch_size", 5))),
            batch_delay=float(lkp.get("batch_delay", 0.1)),
        ),
        locale=LocaleConfig(
            language=loc.get("language", "sv"),
            unknown_name=loc.get("unknown_name", "Okänd produkt"),
        ),
        measurements=MeasurementConfig(
            glass_ml=float(msr.get("glass_ml", defaults.glass_ml)),
            teaspoon_g=float(msr.get("teaspoon_g", defaults.teaspoon_g)),
            tablespoon_g=float(msr.get("tablespoon_g", defaults.tablespoon_g)),
            spoonable_volume_ml=float(
                msr.get("spoonable_volume_ml", defaults.spoonable_volume_ml)
            ),
            cooked_volume_ml=float(
                msr.get("cooked_volume_ml", defaults.cooked_volume_ml)
            ),
            dry_volume_ml=float(msr.get("dry_volume_ml", defaults.dry_volume_ml)),
        ),
        export=ExportConfig(
            delimiter=exp.get("delimiter", ","),
            filename=exp.get("filename", "swedish-food-products.csv"),
        ),
    )
