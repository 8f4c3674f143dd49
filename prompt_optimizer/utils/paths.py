from __future__ import annotations

from pathlib import Path

# Data files ship inside the package so installed copies find them too.
PACKAGE_DIR = Path(__file__).resolve().parents[1]
CONFIGS_DIR = PACKAGE_DIR / "configs"
PROMPTS_DIR = CONFIGS_DIR / "prompts"
SCHEMAS_DIR = PACKAGE_DIR / "schemas"
