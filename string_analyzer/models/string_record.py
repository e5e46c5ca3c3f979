from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON
from sqlalchemy.dialects import mysql
from string_analyzer.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class StringRecord(Base):
    __tablename__ = "string_records"

    id = Column(String(64), primary_key=True, index=True)  # SHA-256 hash
    # Unique through the primary key: the hash is taken over the trimmed value
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False, index=True)
    is_palindrome = Column(Boolean, nullable=False, index=True)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False, index=True)
    sha256_hash = Column(String(64), unique=True, nullable=False)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(
        DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql"),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self):
        return f"StringRecord({self.id})"
