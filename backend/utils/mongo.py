import logging
from contextlib import contextmanager

from bson import ObjectId
from pymongo.errors import ConnectionFailure, ExecutionTimeout

from utils.errors import StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    """
    Translate driver connectivity failures into StoreUnavailable.
    No retries here; that belongs to the client configuration.
    """
    try:
        yield
    except (ConnectionFailure, ExecutionTimeout) as e:
        logger.error("STORE_UNAVAILABLE op=%s error=%s", operation, type(e).__name__)
        raise StoreUnavailable() from e


def serialize_doc(doc: dict) -> dict:
    if not doc:
        return doc

    doc = dict(doc)
    doc.pop("password", None)
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            doc[k] = str(v)
    return doc
