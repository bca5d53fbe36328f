"""SQLite storage layer."""

from holdem_advisor.storage.database import Database
from holdem_advisor.storage.repository import RegretRepository

__all__ = ["Database", "RegretRepository"]
