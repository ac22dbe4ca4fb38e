from fastapi import APIRouter, Depends, Header, HTTPException, Query
from datetime import datetime
from typing import Literal, Optional
import hmac
import logging

from config.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from config.env import ADMIN_API_KEY
from database import get_db
from models.account import AdminCreate, PasswordMigration, Role, SellerDecision
from routes.auth import insert_unique_account
from utils.approval import (
    ApprovalDecision,
    approval_prefilter,
    approve_seller,
    reject_seller,
    seller_decision,
)
from utils.audit import log_audit
from utils.hash import hash_password
from utils.login_service import migrate_plaintext_passwords
from utils.mongo import serialize_doc, store_errors
from utils.security import require_role
from utils.validators import normalize_email


router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


# =====================================================
# HELPERS
# =====================================================

def acting_admin_email(admin: dict, data: SellerDecision) -> str:
    """
    The audit actor is the authenticated admin. A body adminEmail is
    accepted for older clients but must name the same admin.
    """
    email = normalize_email(admin.get("email"))
    if data.adminEmail and normalize_email(data.adminEmail) != email:
        raise HTTPException(403, "Admin email does not match the signed-in admin")
    return email


def require_admin_key(x_admin_key: Optional[str] = Header(None)):
    expected = (ADMIN_API_KEY or "").strip()
    if not expected:
        raise HTTPException(503, "Admin setup is disabled")
    if not x_admin_key or not hmac.compare_digest(x_admin_key, expected):
        raise HTTPException(403, "Invalid admin key")


# =====================================================
# ADMIN SETUP
# =====================================================

@router.post("/setup", status_code=201, dependencies=[Depends(require_admin_key)])
async def setup_admin(data: AdminCreate, db=Depends(get_db)):
    email = data.email.lower()
    admin = {
        "email": email,
        "password": hash_password(data.password),
        "name": data.name or "Administrator",
        "role": Role.ADMIN.value,
        "status": "active",
        "createdAt": datetime.utcnow(),
        "createdBy": "system",
        "lastLogin": None,
    }

    admin_id = await insert_unique_account(db.admins, admin)

    logger.info("ADMIN_CREATED email=%s id=%s", email, admin_id)

    return {
        "success": True,
        "message": "Admin created successfully",
        "adminId": str(admin_id),
    }


# =====================================================
# SELLER LISTING
# =====================================================

@router.get("/sellers")
async def list_sellers(
    status: Literal["all", "pending", "approved", "rejected", "inconsistent"] = "all",
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    admin=Depends(require_role(Role.ADMIN)),
    db=Depends(get_db),
):
    wanted = None if status == "all" else ApprovalDecision(
        "allow" if status == "approved" else status
    )

    sellers = []
    with store_errors("list_sellers"):
        cursor = db.sellers.find(
            approval_prefilter(wanted), {"password": 0}
        ).sort("createdAt", -1)
        async for seller in cursor:
            decision = seller_decision(seller)
            if wanted is not None and decision is not wanted:
                continue
            seller = serialize_doc(seller)
            seller["approvalDecision"] = decision.value
            sellers.append(seller)

    # the gate decision is computed per record, so pagination happens after filtering
    total = len(sellers)
    start = (page - 1) * limit

    return {
        "success": True,
        "sellers": sellers[start:start + limit],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": (total + limit - 1) // limit,
        },
    }


# =====================================================
# APPROVE / REJECT SELLER
# =====================================================

@router.post("/sellers/{seller_id}/approve")
async def approve(
    seller_id: str,
    data: SellerDecision = SellerDecision(),
    admin=Depends(require_role(Role.ADMIN)),
    db=Depends(get_db),
):
    result = await approve_seller(db, seller_id, acting_admin_email(admin, data))

    message = "Seller approved successfully" if result["changed"] else "Seller already approved"
    return {"success": True, "message": message, **result}


@router.post("/sellers/{seller_id}/reject")
async def reject(
    seller_id: str,
    data: SellerDecision = SellerDecision(),
    admin=Depends(require_role(Role.ADMIN)),
    db=Depends(get_db),
):
    result = await reject_seller(db, seller_id, acting_admin_email(admin, data), data.reason)
    return {"success": True, "message": "Seller rejected successfully", **result}


# =====================================================
# LEGACY PASSWORD MIGRATION
# =====================================================

@router.post("/migrate-passwords")
async def migrate_passwords(
    data: PasswordMigration = PasswordMigration(),
    admin=Depends(require_role(Role.ADMIN)),
    db=Depends(get_db),
):
    admin_email = normalize_email(admin.get("email"))
    results = await migrate_plaintext_passwords(db, data.role, admin_email)

    with store_errors("log_audit"):
        await log_audit(
            db,
            actor_email=admin_email,
            actor_role="admin",
            action="PASSWORDS_MIGRATED",
            metadata={"role": data.role, "migrated": results["migrated"]},
        )

    return {
        "success": True,
        "message": "Password migration completed",
        "results": results,
    }
