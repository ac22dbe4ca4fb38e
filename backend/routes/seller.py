from fastapi import APIRouter, Depends
from datetime import datetime
import logging

from config.constants import DEFAULT_SELLER_COUNTRY
from database import get_db
from models.account import ApprovalStatus, Role, SellerCreate
from routes.auth import insert_unique_account
from utils.hash import hash_password
from utils.security import require_role
from utils.serializers import serialize_account

router = APIRouter(
    prefix="/seller",
    tags=["Seller"]
)
logger = logging.getLogger(__name__)


# ----------------------------------------
# SELLER REGISTRATION
# ----------------------------------------

@router.post("/register", status_code=201)
async def register_seller(data: SellerCreate, db=Depends(get_db)):
    now = datetime.utcnow()
    email = data.email.lower()

    seller = {
        # identity
        "name": f"{data.firstName} {data.lastName}",
        "firstName": data.firstName,
        "lastName": data.lastName,
        "email": email,
        "password": hash_password(data.password),

        # business profile
        "businessName": data.businessName,
        "businessType": data.businessType,
        "businessDescription": data.businessDescription,
        "businessAddress": data.businessAddress,
        "businessCity": data.businessCity,
        "businessCountry": data.businessCountry or DEFAULT_SELLER_COUNTRY,

        # store profile
        "storeName": data.storeName or data.businessName,
        "storeDescription": data.storeDescription or data.businessDescription,
        "storeCategory": data.storeCategory,

        # legal & banking
        "businessLicense": data.businessLicense,
        "taxIdentification": data.taxIdentification,
        "bankName": data.bankName,
        "accountNumber": data.accountNumber,
        "accountName": data.accountName,

        # online presence
        "website": data.website,
        "socialMedia": data.socialMedia,
        "operatingHours": data.operatingHours,

        # approval: both fields move together from here on
        "status": ApprovalStatus.PENDING.value,
        "approvalStatus": ApprovalStatus.PENDING.value,
        "approvedBy": None,
        "approvedAt": None,
        "rejectedBy": None,
        "rejectedAt": None,
        "rejectionReason": None,

        # statistics
        "totalProducts": 0,
        "totalSales": 0,
        "totalRevenue": 0,

        # verification flags
        "emailVerified": False,
        "phoneVerified": False,
        "businessVerified": False,

        "registrationDate": now,
        "createdAt": now,
        "updatedAt": now,
        "lastLogin": None,
    }
    # phone is stored only when given; the unique phone index skips missing keys
    if data.phone:
        seller["phone"] = data.phone

    seller_id = await insert_unique_account(db.sellers, seller)

    logger.info("SELLER_REGISTERED email=%s id=%s", email, seller_id)

    return {
        "success": True,
        "message": "Seller registration submitted successfully. Awaiting admin approval.",
        "sellerId": str(seller_id),
        "approvalStatus": seller["approvalStatus"],
        "email": email,
        "businessName": data.businessName,
    }


# ----------------------------------------
# SELLER PROFILE
# ----------------------------------------

@router.get("/profile")
async def seller_profile(seller=Depends(require_role(Role.SELLER))):
    profile = serialize_account(seller, Role.SELLER)
    profile.update({
        "phone": seller.get("phone"),
        "businessType": seller.get("businessType"),
        "businessDescription": seller.get("businessDescription"),
        "storeCategory": seller.get("storeCategory"),
        "approvedAt": seller.get("approvedAt"),
    })
    return {"success": True, "seller": profile}
