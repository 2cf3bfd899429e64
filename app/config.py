import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), '..', 'info.env'))


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "crime_reports"
    report_collection: str = "reports"
    # bounds server selection and every single operation
    mongo_timeout_ms: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mongo_uri=os.getenv("MONGO_URI", cls.mongo_uri),
            mongo_db=os.getenv("MONGO_DB", cls.mongo_db),
            report_collection=os.getenv("REPORT_COLLECTION", cls.report_collection),
            mongo_timeout_ms=int(os.getenv("MONGO_TIMEOUT_MS", cls.mongo_timeout_ms)),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )
