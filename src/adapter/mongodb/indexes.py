"""MongoDB index helpers."""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

logger = getLogger(__name__)


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an existing one that clashes by name or key spec.

    A clash happens when an index definition changes between releases
    (e.g. a key becomes unique); MongoDB then refuses create_index.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    wanted = dict(keys)
    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue
        if (existing_name == name) != (dict(info.get('key', [])) == wanted):
            logger.warning(f"Replacing conflicting index: {existing_name}")
            collection.drop_index(existing_name)
            collection.create_index(keys, name=name, **kwargs)
            return True

    logger.error(f"Could not resolve index conflict for {name}")
    return False

