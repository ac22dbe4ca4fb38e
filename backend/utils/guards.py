from bson import ObjectId
from bson.errors import InvalidId

from utils.errors import NotFound

# -------------------------------
# ObjectId Guard
# -------------------------------

def parse_object_id(value, name: str = "Seller") -> ObjectId:
    """
    An id that cannot be parsed can never resolve to a record,
    so it is reported as NotFound rather than a validation error.
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if not value:
        raise NotFound(f"{name} not found")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFound(f"{name} not found")
