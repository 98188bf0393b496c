from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

from invoice_composer.core.models.options import Options

logger = logging.getLogger(__name__)

OPTIONS_PATH = Path(__file__).resolve().parents[2] / "data" / "options.json"


def load_options(path: Path | None = None) -> Options:
    """
    Read options from JSON and merge them over the defaults.
    A missing or unreadable file yields the defaults.
    """
    target = Path(path) if path else OPTIONS_PATH
    if not target.exists():
        return Options()
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Cannot read options from %s: %s", target, exc)
        return Options()
    if not isinstance(data, dict):
        logger.warning("Ignoring options in %s: expected an object", target)
        return Options()
    return Options.from_mapping(data)


def save_options(options: Options, path: Path | None = None) -> Path:
    target = Path(path) if path else OPTIONS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    data = asdict(options)
    for key, value in data.items():
        if isinstance(value, tuple):
            data[key] = list(value)
    target.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return target
