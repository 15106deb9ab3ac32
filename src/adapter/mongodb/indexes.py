"""Index creation shared by the MongoDB repositories."""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
INDEX_CONFLICT_CODES = {85, 86}


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, dropping whatever existing index blocks it.

    Returns False when the server reports a conflict but no existing index
    can be blamed for it. Errors other than index conflicts propagate.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in INDEX_CONFLICT_CODES:
            raise

    clashing = list(_conflicting_indexes(collection, keys, name))
    if not clashing:
        logger.error("Failed to resolve index conflict", extra={"index": name})
        return False

    for idx_name in clashing:
        logger.warning("Dropping conflicting index", extra={"index": idx_name})
        collection.drop_index(idx_name)
    collection.create_index(keys, name=name, **kwargs)
    logger.info("Recreated index", extra={"index": name})
    return True


def _conflicting_indexes(collection, keys: list, name: str):
    """Yield existing indexes that share the name or the key pattern."""
    wanted = list(keys)
    for idx_name, info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        # same name means different keys or options, or create would have passed
        if idx_name == name or list(info.get('key', [])) == wanted:
            yield idx_name


def ensure_all_indexes(db) -> bool:
    """Create indexes for every collection. Called at app startup."""
    from adapter.mongodb.task_repository import MongoTaskRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    return all([
        MongoTaskRepository(db).ensure_indexes(),
        MongoUserRepository(db).ensure_indexes(),
    ])
