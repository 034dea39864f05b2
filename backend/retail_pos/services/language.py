"""Per-terminal language preference."""

from retail_pos.core.config import settings
from retail_pos.services.kv_store import KeyValueStore

LANGUAGE_KEY = "language"


async def get_language(store: KeyValueStore) -> str:
    language = await store.get(LANGUAGE_KEY)
    if language not in settings.SUPPORTED_LANGUAGES:
        return settings.DEFAULT_LANGUAGE
    return language


async def set_language(store: KeyValueStore, language: str) -> str:
    if language not in settings.SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language '{language}'. Choose one of: {', '.join(settings.SUPPORTED_LANGUAGES)}"
        )
    await store.set(LANGUAGE_KEY, language)
    return language
