# mongo_crud/base.py
from typing import Any, Dict, List, Optional

from loguru import logger
from pymongo.collection import Collection
from pymongo.database import Database


class BaseRepository:
    """One collection, raw documents in and out.

    pymongo errors are not caught here; they reach the caller unchanged.
    """

    def __init__(self, db: Database, collection_name: str):
        self.db = db
        self.col: Collection = db[collection_name]
        self.name = collection_name

    def find_one(self, filt: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self.col.find_one(filt)
        logger.debug(f"[{self.name}] find_one keys={list(filt)} found={doc is not None}")
        return doc

    def find(self, filt: Dict[str, Any]) -> List[Dict[str, Any]]:
        docs = list(self.col.find(filt))
        logger.debug(f"[{self.name}] find keys={list(filt)} count={len(docs)}")
        return docs

    def insert_one(self, doc: Dict[str, Any]) -> Any:
        res = self.col.insert_one(doc)
        # pymongo adds `_id` to the dict in place; make sure it is there
        doc.setdefault("_id", res.inserted_id)
        logger.debug(f"[{self.name}] insert_one _id={res.inserted_id}")
        return res.inserted_id

    def update_one(self, filt: Dict[str, Any], fields: Dict[str, Any]) -> int:
        res = self.col.update_one(filt, {"$set": fields})
        logger.debug(f"[{self.name}] update_one keys={list(filt)} set={list(fields)} matched={res.matched_count}")
        return res.matched_count

    def delete_one(self, filt: Dict[str, Any]) -> int:
        res = self.col.delete_one(filt)
        logger.debug(f"[{self.name}] delete_one keys={list(filt)} deleted={res.deleted_count}")
        return res.deleted_count

    def delete_many(self, filt: Dict[str, Any]) -> int:
        res = self.col.delete_many(filt)
        logger.debug(f"[{self.name}] delete_many keys={list(filt)} deleted={res.deleted_count}")
        return res.deleted_count
