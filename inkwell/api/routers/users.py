"""Account administration and self-service profile endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.cookies import clear_access_cookie
from inkwell.api.deps import commit, get_container, get_current_identity, get_db_session
from inkwell.core.authorization import ensure_admin, ensure_can_mutate
from inkwell.core.container import ApplicationContainer
from inkwell.core.security import Identity
from inkwell.modules.accounts import UNSET, AccountService, AccountUpdateInput
from inkwell.schemas import (
    AccountListResponse,
    AccountResponse,
    MessageResponse,
    RoleUpdateRequest,
    StatusUpdateRequest,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signout", response_model=MessageResponse)
async def signout(response: Response, container: ApplicationContainer = Depends(get_container)):
    clear_access_cookie(response, container.settings)
    return MessageResponse(message="User has been signed out")


@router.get("/getusers", response_model=AccountListResponse)
async def list_users(
    start_index: int = 0,
    limit: int = 9,
    sort: str = "desc",
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_admin(identity, "You are not allowed to see all users")
    page = await AccountService.with_session(db).list_accounts(
        skip=start_index,
        limit=limit,
        ascending=sort == "asc",
    )
    return AccountListResponse(
        users=[AccountResponse.model_validate(account) for account in page.accounts],
        total_users=page.total,
        last_month_users=page.last_month,
    )


@router.put("/update/{user_id}", response_model=AccountResponse)
async def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_can_mutate(identity, user_id, "You are not allowed to update this user")
    provided = payload.model_fields_set
    update = AccountUpdateInput(
        username=payload.username if "username" in provided else UNSET,
        email=payload.email if "email" in provided else UNSET,
        password=payload.password if "password" in provided else UNSET,
        profile_picture=payload.profile_picture if "profile_picture" in provided else UNSET,
    )
    account = await AccountService.with_session(db).update_profile(user_id, update)
    await commit(db)
    return account


@router.put("/update-role/{user_id}", response_model=AccountResponse)
async def update_role(
    user_id: str,
    payload: RoleUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_admin(identity, "You are not allowed to change roles")
    account = await AccountService.with_session(db).change_role(user_id, payload.role)
    await commit(db)
    return account


@router.put("/update-status/{user_id}", response_model=AccountResponse)
async def update_status(
    user_id: str,
    payload: StatusUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_admin(identity, "You are not allowed to change account status")
    account = await AccountService.with_session(db).set_active(user_id, payload.is_active)
    await commit(db)
    return account


@router.delete("/delete/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_admin(identity, "You are not allowed to delete this user")
    await AccountService.with_session(db).delete_account(user_id)
    await commit(db)
    return MessageResponse(message="User has been deleted")


@router.get("/{user_id}", response_model=AccountResponse)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db_session)):
    return await AccountService.with_session(db).require(user_id)
