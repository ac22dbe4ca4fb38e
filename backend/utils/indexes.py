from pymongo import ASCENDING, DESCENDING
from pymongo.errors import OperationFailure

from models.account import ROLE_STORES


def _normalize_key_pairs(keys):
    return [(k, v) for k, v in keys]


async def _create_index_safe(collection, keys, **kwargs):
    """
    Create index safely.
    If Mongo reports IndexOptionsConflict/IndexKeySpecsConflict for same key pattern,
    drop the conflicting index and recreate with desired options.
    """
    desired_key = _normalize_key_pairs(keys)
    desired_name = kwargs.get("name")
    try:
        await collection.create_index(keys, **kwargs)
        return
    except OperationFailure as e:
        if getattr(e, "code", None) not in {85, 86}:
            raise

        conflicting_names = []
        async for idx in collection.list_indexes():
            idx_key = _normalize_key_pairs(list(idx.get("key", {}).items()))
            if idx_key == desired_key:
                idx_name = idx.get("name")
                if idx_name and idx_name != desired_name:
                    conflicting_names.append(idx_name)

        for idx_name in conflicting_names:
            await collection.drop_index(idx_name)

        await collection.create_index(keys, **kwargs)


async def ensure_indexes(db):
    # Account stores: email/phone unique within each role
    for store_name in ROLE_STORES.values():
        store = db[store_name]
        await _create_index_safe(
            store,
            [("email", ASCENDING)],
            name=f"{store_name}_email_unique_idx",
            unique=True,
        )
        await _create_index_safe(
            store,
            [("phone", ASCENDING)],
            name=f"{store_name}_phone_unique_idx",
            unique=True,
            partialFilterExpression={"phone": {"$type": "string"}},
        )

    # Seller approval listings
    await _create_index_safe(
        db.sellers,
        [("approvalStatus", ASCENDING), ("status", ASCENDING)],
        name="sellers_approval_fields_idx",
    )
    await _create_index_safe(
        db.sellers,
        [("createdAt", DESCENDING)],
        name="sellers_created_idx",
    )

    # Audit trail
    await _create_index_safe(
        db.audit_logs,
        [("created_at", DESCENDING)],
        name="audit_logs_created_idx",
    )
