"""Terminal preferences."""

from fastapi import APIRouter, Depends, HTTPException, status

from retail_pos.core.deps import get_current_user
from retail_pos.schemas.auth import CurrentUser
from retail_pos.schemas.messaging import LanguagePreference
from retail_pos.services.kv_store import KeyValueStore, get_kv_store
from retail_pos.services.language import get_language, set_language

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/language", response_model=LanguagePreference)
async def read_language(
    current_user: CurrentUser = Depends(get_current_user),
    store: KeyValueStore = Depends(get_kv_store),
):
    return LanguagePreference(language=await get_language(store))


@router.put("/language", response_model=LanguagePreference)
async def update_language(
    body: LanguagePreference,
    current_user: CurrentUser = Depends(get_current_user),
    store: KeyValueStore = Depends(get_kv_store),
):
    try:
        language = await set_language(store, body.language)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return LanguagePreference(language=language)
