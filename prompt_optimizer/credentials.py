from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key, unset_key

DEFAULT_KEY_NAME = "OPENROUTER_API_KEY"


class CredentialStore:
    """API key persisted in a dotenv file.

    A key saved in the file wins over one exported in the environment, so a
    key entered at the prompt replaces whatever the shell provided. Clearing
    removes the key from both the file and the process environment.
    """

    def __init__(self, env_path: Path, key_name: str = DEFAULT_KEY_NAME) -> None:
        self.env_path = Path(env_path)
        self.key_name = key_name

    def get_key(self) -> Optional[str]:
        value = None
        if self.env_path.exists():
            value = dotenv_values(self.env_path).get(self.key_name)
        if not value:
            value = os.getenv(self.key_name)
        return value or None

    def save_key(self, api_key: str) -> None:
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key must not be blank.")
        self.env_path.parent.mkdir(parents=True, exist_ok=True)
        self.env_path.touch(exist_ok=True)
        set_key(str(self.env_path), self.key_name, api_key)
        print(f"[credentials] {self.key_name} saved to {self.env_path}")

    def has_key(self) -> bool:
        key = self.get_key()
        return bool(key and key.strip())

    def clear_key(self) -> None:
        if self.env_path.exists():
            unset_key(str(self.env_path), self.key_name)
        # load_dotenv may already have copied the key into the environment.
        os.environ.pop(self.key_name, None)
        print(f"[credentials] {self.key_name} cleared from {self.env_path}")
