"""
MongoDB document and query operations implementation.
Contains the MongoDocuments (CRUD) and MongoQueries (reads, aggregations) classes.
"""

from typing import Any, Dict, List, Optional

from ..document_manager import DocumentManager
from ..query_manager import QueryManager
from .core import store_errors
from bookstore.utils import normalize_id, to_object_id


class MongoDocuments(DocumentManager):
    """MongoDB implementation of document operations"""

    def __init__(self, database):
        super().__init__(database)

    def _store_id(self, id: str) -> Any:
        return to_object_id(id)

    async def _create_impl(self, data: Dict[str, Any]) -> str:
        collection = self.database.core.collection()
        with store_errors("insert"):
            result = await collection.insert_one(data)
        return normalize_id(result.inserted_id)

    async def _create_many_impl(self, data: List[Dict[str, Any]]) -> List[str]:
        collection = self.database.core.collection()
        with store_errors("insert"):
            result = await collection.insert_many(data, ordered=True)
        return [normalize_id(inserted_id) for inserted_id in result.inserted_ids]

    async def _get_one_impl(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        collection = self.database.core.collection()
        with store_errors("find"):
            return await collection.find_one(query)

    async def _find_impl(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        collection = self.database.core.collection()
        with store_errors("find"):
            return await collection.find(query).to_list(length=None)

    async def _count_impl(self, query: Dict[str, Any]) -> int:
        collection = self.database.core.collection()
        with store_errors("count"):
            return await collection.count_documents(query)

    async def _update_one_impl(self, query: Dict[str, Any], changes: Dict[str, Any]) -> int:
        collection = self.database.core.collection()
        with store_errors("update"):
            result = await collection.update_one(query, {"$set": changes})
        return result.modified_count

    async def _delete_one_impl(self, query: Dict[str, Any]) -> int:
        collection = self.database.core.collection()
        with store_errors("delete"):
            result = await collection.delete_one(query)
        return result.deleted_count

    async def _delete_many_impl(self, query: Dict[str, Any]) -> int:
        collection = self.database.core.collection()
        with store_errors("delete"):
            result = await collection.delete_many(query)
        return result.deleted_count


class MongoQueries(QueryManager):
    """MongoDB implementation of queries and aggregation pipelines"""

    def __init__(self, database):
        super().__init__(database)

    async def _find_impl(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        collection = self.database.core.collection()
        self.logger.debug(f"MongoQueries: find {query}")
        with store_errors("find"):
            cursor = collection.find(query['filter'], query['projection'])
            if query['sort']:
                cursor = cursor.sort(query['sort'])
            return await cursor.to_list(length=None)

    async def _aggregate_impl(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        collection = self.database.core.collection()
        with store_errors("aggregate"):
            return await collection.aggregate(pipeline).to_list(length=None)
