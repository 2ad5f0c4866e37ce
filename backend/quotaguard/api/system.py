from __future__ import annotations

from fastapi import APIRouter

from quotaguard.services.quota import get_quota_state

router = APIRouter(tags=["system"])


@router.get("/system/quota")
def system_quota() -> dict[str, object]:
    return get_quota_state()
