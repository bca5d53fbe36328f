"""Output formatting for terminal and tables."""

from holdem_advisor.formatters.text import TextFormatter
from holdem_advisor.formatters.table import TableFormatter

__all__ = ["TextFormatter", "TableFormatter"]
