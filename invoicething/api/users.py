# invoicething/api/users.py

import logging

from fastapi import APIRouter, Depends, HTTPException

from invoicething.api.deps import get_current_user
from invoicething.db.engine import get_engine
from invoicething.models.users import UserOut, UserSyncIn
from invoicething.repositories.users import get_user, store_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=UserOut)
def sync_user(payload: UserSyncIn) -> UserOut:
    """
    Create or refresh a user from identity-provider profile data.
    Called on sign-in.
    """
    engine = get_engine()

    with engine.begin() as conn:
        user_id = store_user(
            conn,
            subject_id=payload.subject_id,
            email=payload.email,
            name=payload.name,
            image_url=payload.image_url,
        )
        user = get_user(conn, user_id)

    logger.info("Synced user %s (subject %s)", user_id, payload.subject_id)
    return UserOut.model_validate(user)


@router.get("/me", response_model=UserOut)
def get_me(current_user: dict = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(current_user)


@router.get("/{user_id}", response_model=UserOut)
def get_user_by_id(
    user_id: int,
    current_user: dict = Depends(get_current_user),
) -> UserOut:
    # Users can only see themselves.
    if user_id != current_user["id"]:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(current_user)
