import asyncio
import logging

from config.env import APPROVAL_AUDIT_INTERVAL_SECONDS
from utils.approval import ApprovalDecision, seller_decision

logger = logging.getLogger(__name__)


async def scan_inconsistent_sellers(db) -> int:
    """
    APPROVAL CONSISTENCY SCAN (READ-ONLY)
    -------------------------------------
    - Sellers whose status / approvalStatus disagree
    - Sellers with neither field set
    Repairs go through the admin approve / reject actions.
    """
    inconsistent = 0

    cursor = db.sellers.find(
        {},
        {"email": 1, "status": 1, "approvalStatus": 1},
    )

    async for seller in cursor:
        if seller_decision(seller) is not ApprovalDecision.INCONSISTENT:
            continue

        inconsistent += 1
        logger.info(
            "SELLER_APPROVAL_INCONSISTENT seller=%s email=%s status=%s approvalStatus=%s",
            seller["_id"],
            seller.get("email"),
            seller.get("status"),
            seller.get("approvalStatus"),
        )

    logger.info("SELLER_APPROVAL_SCAN inconsistent=%s", inconsistent)
    return inconsistent


async def approval_audit_worker(db):
    while True:
        try:
            await scan_inconsistent_sellers(db)
        except Exception:
            logger.exception("SELLER_APPROVAL_SCAN_ERROR")

        await asyncio.sleep(APPROVAL_AUDIT_INTERVAL_SECONDS)
