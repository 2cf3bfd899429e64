import logging
import re
from typing import Any, Dict, List, Optional

from bson.errors import InvalidDocument
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from models import Report, ReportCreate
from app.config import Settings
from app.errors import StorageError
from app.utils.validator import ensure_utc

logger = logging.getLogger(__name__)


class ReportRepository:
    """Append-only store of crime reports backed by a MongoDB collection."""

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self.collection = collection
        # set only when this repository opened the client itself
        self.client = client

    @classmethod
    def connect(cls, settings: Settings) -> "ReportRepository":
        """
        Open the shared client and check the server is reachable.

        Raises StorageError when the ping fails; the service must not start
        serving requests in that case.
        """
        client = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            timeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StorageError("Report store is unreachable", details=str(exc)) from exc

        logger.info("Connected to MongoDB database %s", settings.mongo_db)
        return cls(client[settings.mongo_db][settings.report_collection], client=client)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None

    def ensure_indexes(self) -> None:
        try:
            self.collection.create_index([("title", ASCENDING)])
            self.collection.create_index([("location", ASCENDING)])
        except PyMongoError as exc:
            raise StorageError("Failed to create report indexes", details=str(exc)) from exc

    def create(self, record: ReportCreate) -> str:
        document = {
            "title": record.title,
            "description": record.description,
            "location": record.location,
            "date": record.date,
            "status": record.status.value,
        }
        try:
            result = self.collection.insert_one(document)
        except (PyMongoError, InvalidDocument, OverflowError) as exc:
            raise StorageError("Failed to store report", details=str(exc)) from exc

        if not result.inserted_id:
            raise StorageError("Store did not assign an id to the report")
        return str(result.inserted_id)

    def list(self) -> List[Report]:
        """Return every report in insertion order."""
        return self._find({})

    def search(self, term: Optional[str], case_sensitive: bool = True) -> List[Report]:
        """
        Return reports whose title or location contains ``term``.

        The term is matched literally. An empty term returns every report.
        """
        if not term:
            return self.list()

        pattern: Dict[str, Any] = {"$regex": re.escape(term)}
        if not case_sensitive:
            pattern["$options"] = "i"
        return self._find({"$or": [{"title": pattern}, {"location": pattern}]})

    def _find(self, query: Dict[str, Any]) -> List[Report]:
        # ObjectIds grow with insertion, so sorting on _id keeps insertion order
        try:
            documents = list(self.collection.find(query).sort("_id", ASCENDING))
        except PyMongoError as exc:
            raise StorageError("Failed to read reports", details=str(exc)) from exc
        return [_to_report(doc) for doc in documents]


def _to_report(doc: Dict[str, Any]) -> Report:
    return Report(
        id=str(doc["_id"]),
        title=doc["title"],
        description=doc.get("description", ""),
        location=doc.get("location", ""),
        date=ensure_utc(doc["date"]),
        status=doc.get("status", "Reported"),
    )
