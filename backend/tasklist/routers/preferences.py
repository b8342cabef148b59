from fastapi import APIRouter, Depends

from ..context import Context
from ..endpoints import preferences
from ..models import PreferencesUpdate, UserPreferences
from .deps import get_context

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("")
def get_preferences(ctx: Context = Depends(get_context)) -> UserPreferences:
    return preferences.get_preferences(ctx)


@router.patch("")
def update_preferences(body: PreferencesUpdate, ctx: Context = Depends(get_context)) -> dict:
    preferences.update_preferences(ctx, body)
    return {"success": True}
