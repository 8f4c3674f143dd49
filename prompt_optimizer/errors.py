from __future__ import annotations


class ProviderError(RuntimeError):
    """The model provider could not produce a completion."""


class MissingApiKeyError(ProviderError):
    def __init__(self, message: str = "No API key found. Please add your OpenRouter API key in settings.") -> None:
        super().__init__(message)
