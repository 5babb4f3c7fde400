"""MongoDB adapter — resource, generic repository, user repository.

Built on **motor** (asyncio driver) and the ``bson``/``pymongo`` types it
ships with.
"""

from srvkit.adapters.mongodb.document import Document, has_operators, id_to_str
from srvkit.adapters.mongodb.repository import MongoRepository
from srvkit.adapters.mongodb.resource import MongoResource
from srvkit.adapters.mongodb.users import MongoUserRepository, UserDocument

__all__ = [
    "Document",
    "MongoRepository",
    "MongoResource",
    "MongoUserRepository",
    "UserDocument",
    "has_operators",
    "id_to_str",
]
