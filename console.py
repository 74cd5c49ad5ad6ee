"""
console.py - Console output: timestamped log lines and the rating report
"""

import sys
from datetime import datetime


def log(message: str, level: str = "INFO"):
    """Print timestamped log message"""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{timestamp}] {level}: {message}")


def format_rating(record) -> str:
    """Format one RatingRecord as a report line."""
    return f"Drug: {record.name} | Ratings: {record.rating_count} | Average: {record.average_rating}"


def show_rating(record, out=None):
    """
    Write one report line for a RatingRecord.

    Lines are not deduplicated; reporting the same record twice prints it twice.
    """
    out = out or sys.stdout
    out.write(format_rating(record) + "\n")
    out.flush()
