"""用户资料路由 -- GET /api/users/{user_id}"""

from fastapi import APIRouter, Depends
from taskledger.core.exceptions import UserNotFoundError
from taskledger.core.models import User
from taskledger.core.store import StoreGroup

from ..deps import get_store_group
from .errors import error_response

router = APIRouter()


@router.get("/api/users/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    store_group: StoreGroup = Depends(get_store_group),
):
    async with store_group.conn_lock:
        user = await store_group.user_store.get_user(user_id)
    if user is None:
        return error_response(UserNotFoundError(user_id))
    return user
