import pytest

from retail_pos.services.kv_store import InMemoryKeyValueStore
from retail_pos.services.language import LANGUAGE_KEY, get_language, set_language


@pytest.mark.asyncio
async def test_default_language_when_unset():
    assert await get_language(InMemoryKeyValueStore()) == "en"


@pytest.mark.asyncio
async def test_set_and_get_language():
    store = InMemoryKeyValueStore()
    assert await set_language(store, "sw") == "sw"
    assert await get_language(store) == "sw"


@pytest.mark.asyncio
async def test_unsupported_stored_value_falls_back():
    store = InMemoryKeyValueStore({LANGUAGE_KEY: "fr"})
    assert await get_language(store) == "en"


@pytest.mark.asyncio
async def test_set_unsupported_language_raises():
    store = InMemoryKeyValueStore()
    with pytest.raises(ValueError):
        await set_language(store, "fr")
    assert await store.get(LANGUAGE_KEY) is None
