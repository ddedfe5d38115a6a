"""Shared FastAPI dependencies."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.database import get_db
from ..models import User
from ..services import directory
from ..services.notifications import Notifier, build_notifier


def get_current_user(
    x_user_id: Optional[int] = Header(None, description="Id of the calling user"),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from the ``X-User-Id`` header."""

    user = directory.find_user(db, x_user_id) if x_user_id is not None else None
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown or inactive user")
    return user


@lru_cache(maxsize=1)
def get_notifier() -> Notifier:
    return build_notifier(get_settings())
