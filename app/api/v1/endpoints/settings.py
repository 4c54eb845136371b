"""User settings: bodyweight, units and progressive overload increments."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.settings import UserSettingsRead, UserSettingsUpdate
from app.services.set_history import get_user_settings

router = APIRouter()


@router.get("", response_model=UserSettingsRead)
async def read_settings(db: AsyncSession = Depends(get_db)):
    return await get_user_settings(db)


@router.patch("", response_model=UserSettingsRead)
async def update_settings(
    payload: UserSettingsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update; only the fields sent are changed."""
    settings = await get_user_settings(db)
    for k, v in payload.model_dump(exclude_unset=True, mode="json").items():
        setattr(settings, k, v)
    await db.flush()
    await db.refresh(settings)
    return settings
