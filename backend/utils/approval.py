"""
Seller approval gate.

Seller records carry two historically separate approval fields,
``status`` (legacy mirror) and ``approvalStatus``. Older code paths
sometimes wrote only one of them, so the gate reconciles the pair
instead of trusting either field alone, and the admin actions below
are the only writers allowed to change them.
"""
import logging
from datetime import datetime
from enum import Enum

from config.constants import DEFAULT_REJECTION_REASON
from models.account import ApprovalStatus
from utils.audit import log_audit
from utils.errors import (
    InconsistentApprovalState,
    NotFound,
    PendingApproval,
    Rejected,
)
from utils.guards import parse_object_id
from utils.mongo import store_errors

logger = logging.getLogger(__name__)


class ApprovalDecision(str, Enum):
    ALLOW = "allow"
    PENDING = "pending"
    REJECTED = "rejected"
    INCONSISTENT = "inconsistent"


def normalize_approval(value):
    """Map a stored field value to an ApprovalStatus, or None when unset."""
    if not isinstance(value, str):
        return None
    try:
        return ApprovalStatus(value.strip().lower())
    except ValueError:
        return None


def evaluate_approval(status, approval_status) -> ApprovalDecision:
    pair = (normalize_approval(status), normalize_approval(approval_status))

    if pair == (ApprovalStatus.APPROVED, ApprovalStatus.APPROVED):
        return ApprovalDecision.ALLOW

    # rejection wins over a stale "approved" in the other field
    if ApprovalStatus.REJECTED in pair:
        return ApprovalDecision.REJECTED

    # an approval in one field means a reviewer acted; the other field is a partial write
    if ApprovalStatus.APPROVED in pair:
        return ApprovalDecision.INCONSISTENT

    if ApprovalStatus.PENDING in pair:
        return ApprovalDecision.PENDING

    return ApprovalDecision.INCONSISTENT


def seller_decision(seller: dict) -> ApprovalDecision:
    return evaluate_approval(seller.get("status"), seller.get("approvalStatus"))


def _field_is(value: ApprovalStatus) -> dict:
    # stored values may differ in case and surrounding whitespace
    return {"$regex": rf"^\s*{value.value}\s*$", "$options": "i"}


def approval_prefilter(wanted) -> dict:
    """
    Narrow a seller query to records that can still reach ``wanted``.
    The result is a superset; callers apply ``seller_decision`` per record.
    """
    if wanted is ApprovalDecision.ALLOW:
        approved = _field_is(ApprovalStatus.APPROVED)
        return {"status": approved, "approvalStatus": approved}

    if wanted in (ApprovalDecision.PENDING, ApprovalDecision.REJECTED):
        field = _field_is(ApprovalStatus(wanted.value))
        return {"$or": [{"status": field}, {"approvalStatus": field}]}

    return {}


_DENIALS = {
    ApprovalDecision.PENDING: PendingApproval,
    ApprovalDecision.REJECTED: Rejected,
    ApprovalDecision.INCONSISTENT: InconsistentApprovalState,
}


def enforce_approval(seller: dict) -> None:
    decision = seller_decision(seller)
    if decision is ApprovalDecision.ALLOW:
        return
    raise _DENIALS[decision]()


# =====================================================
# ADMIN CORRECTIVE ACTIONS
# =====================================================

def approval_update(target: ApprovalStatus, admin_email: str, reason: str | None = None) -> dict:
    """
    Build the single $set that moves both approval fields together.
    """
    now = datetime.utcnow()
    update = {
        "status": target.value,
        "approvalStatus": target.value,
        "updatedAt": now,
    }

    if target is ApprovalStatus.APPROVED:
        update.update({
            "approvedBy": admin_email,
            "approvedAt": now,
            "rejectedBy": None,
            "rejectedAt": None,
            "rejectionReason": None,
        })
    elif target is ApprovalStatus.REJECTED:
        update.update({
            "rejectedBy": admin_email,
            "rejectedAt": now,
            "rejectionReason": (reason or "").strip() or DEFAULT_REJECTION_REASON,
        })
    else:
        raise ValueError(f"Unsupported approval target: {target}")

    return update


async def _apply_decision(db, seller_id, target: ApprovalStatus, admin_email: str, reason=None) -> dict:
    oid = parse_object_id(seller_id)

    with store_errors("load_seller"):
        seller = await db.sellers.find_one({"_id": oid})
    if not seller:
        raise NotFound("Seller not found")

    before = seller_decision(seller)

    # re-approving a consistent record changes nothing
    if target is ApprovalStatus.APPROVED and before is ApprovalDecision.ALLOW:
        return {"sellerId": str(oid), "changed": False, "decision": before.value}

    update = approval_update(target, admin_email, reason)

    with store_errors("apply_seller_decision"):
        result = await db.sellers.update_one({"_id": oid}, {"$set": update})
    if result.matched_count == 0:
        raise NotFound("Seller not found")

    action = "SELLER_APPROVED" if target is ApprovalStatus.APPROVED else "SELLER_REJECTED"

    with store_errors("log_audit"):
        await log_audit(
            db,
            actor_email=admin_email,
            actor_role="admin",
            action=action,
            metadata={
                "seller_id": str(oid),
                "previous": {
                    "status": seller.get("status"),
                    "approvalStatus": seller.get("approvalStatus"),
                },
                "reason": update.get("rejectionReason"),
            },
        )

    logger.info("%s seller=%s by=%s previous=%s", action, oid, admin_email, before.value)

    return {"sellerId": str(oid), "changed": True, "decision": seller_decision(update).value}


async def approve_seller(db, seller_id, admin_email: str) -> dict:
    return await _apply_decision(db, seller_id, ApprovalStatus.APPROVED, admin_email)


async def reject_seller(db, seller_id, admin_email: str, reason: str | None = None) -> dict:
    return await _apply_decision(db, seller_id, ApprovalStatus.REJECTED, admin_email, reason)
