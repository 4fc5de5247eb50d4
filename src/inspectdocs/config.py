"""Render configuration: company details, assets, fonts and output location."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

ENV_PREFIX = "INSPECTDOCS_"


@dataclass
class RenderConfig:
    """Settings shared by every generator run.

    Everything the record itself does not carry lives here: the company
    letterhead, optional logo and embedded fonts, the theme and where the
    PDFs are written.
    """

    company_name: str = "Wasla Property Solutions"
    company_name_ar: str = "وصلة للحلول العقارية"
    registration: str = "CR. 1068375"
    contact_email: str = "info@waslaoman.com"
    contact_phone: str = "+968 90699799"
    default_inspector: str = "Wasla Inspector"

    logo: Optional[str] = None
    font_path: Optional[str] = None
    bold_font_path: Optional[str] = None

    theme: str = "wasla"
    invoice_theme: str = "slate"
    output_dir: Path = field(default_factory=lambda: Path("output"))
    asset_timeout: float = 30.0
    photo_limit: Optional[int] = None
    watermark: bool = True

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> RenderConfig:
        """Build a config from ``INSPECTDOCS_*`` variables, then apply overrides.

        ``INSPECTDOCS_OUTPUT_DIR`` maps to ``output_dir`` and so on. Overrides
        that are ``None`` are ignored so CLI options can be passed straight
        through.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            values[f.name] = _coerce(f.name, raw)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _coerce(name: str, raw: str):
    if name == "output_dir":
        return Path(raw)
    if name == "asset_timeout":
        return float(raw)
    if name == "photo_limit":
        return int(raw)
    if name == "watermark":
        return raw.strip().lower() not in ("0", "false", "no", "off")
    return raw
