"""Domain services: the three ledgers and news ingestion."""

from .attendance import AttendanceLedger
from .news import IngestionResult, NewsFetchError, NewsIngestionWorker, NewsService
from .petitions import SignatureLedger
from .votes import VoteLedger

__all__ = [
    "AttendanceLedger",
    "IngestionResult",
    "NewsFetchError",
    "NewsIngestionWorker",
    "NewsService",
    "SignatureLedger",
    "VoteLedger",
]
