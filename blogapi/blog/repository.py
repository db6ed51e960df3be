"""Storage adapter over the ``blogs`` collection.

The core speaks to storage only through this class, passing Mongo filter,
sort and projection documents built by the query builder.
"""

from typing import List, Optional

from fastapi import Depends
from pymongo import ReturnDocument

from blogapi.database.connection import get_db


class BlogRepository:
    def __init__(self, collection):
        self.collection = collection

    def find(self, filter: dict, sort=None, skip: int = 0, limit: int = 0,
             projection: Optional[dict] = None) -> List[dict]:
        cursor = self.collection.find(filter, projection)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def find_one(self, filter: dict, projection: Optional[dict] = None,
                 sort=None) -> Optional[dict]:
        return self.collection.find_one(filter, projection, sort=sort)

    def count(self, filter: dict) -> int:
        return self.collection.count_documents(filter)

    def save(self, document: dict) -> dict:
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def increment(self, filter: dict, field: str, delta: int,
                  set_fields: Optional[dict] = None,
                  projection: Optional[dict] = None) -> Optional[dict]:
        """Atomically add ``delta`` to ``field`` on the first match.

        Returns the document after the update, or None if nothing matched.
        """
        update = {"$inc": {field: delta}}
        if set_fields:
            update["$set"] = set_fields
        return self.collection.find_one_and_update(
            filter,
            update,
            projection=projection,
            return_document=ReturnDocument.AFTER,
        )

    def sum_field(self, filter: dict, field: str) -> int:
        rows = list(self.collection.aggregate([
            {"$match": filter},
            {"$group": {"_id": None, "total": {"$sum": f"${field}"}}},
        ]))
        if not rows:
            return 0
        return rows[0]["total"]


def get_repository(db=Depends(get_db)) -> BlogRepository:
    return BlogRepository(db.blogs)
