"""Root conftest: exports .env.test so Settings never sees a developer's .env."""
from __future__ import annotations

import os
from pathlib import Path

ENV_TEST = Path(__file__).resolve().parent / ".env.test"


def _read_env(path: Path) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if line and not line.startswith("#") and "=" in line:
            key, value = line.split("=", 1)
            pairs[key.strip()] = value.strip()
    return pairs


if ENV_TEST.exists():
    for _key, _value in _read_env(ENV_TEST).items():
        os.environ.setdefault(_key, _value)
