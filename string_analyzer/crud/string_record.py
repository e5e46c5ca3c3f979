from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import and_, or_, desc
from typing import Dict, List, Optional
import logging

from string_analyzer.exceptions import DuplicateStringError
from string_analyzer.models.string_record import StringRecord
from string_analyzer.services.query_filters import (
    CONTAINS,
    CONTAINS_ANY,
    EQ,
    GT,
    LT,
    RANGE,
    Condition,
)

logger = logging.getLogger(__name__)


def create_string_record(db: Session, value: str, properties: Dict) -> StringRecord:
    """
    Insert a new record.

    The primary key is the content hash, so a concurrent insert of the same
    value is rejected by the database rather than by a prior lookup.
    """
    db_string = StringRecord(
        id=properties["sha256_hash"],
        value=value,
        length=properties["length"],
        is_palindrome=properties["is_palindrome"],
        unique_characters=properties["unique_characters"],
        word_count=properties["word_count"],
        sha256_hash=properties["sha256_hash"],
        character_frequency_map=properties["character_frequency_map"],
    )

    db.add(db_string)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Duplicate string rejected: {properties['sha256_hash']}")
        raise DuplicateStringError("String already exists in the system")
    db.refresh(db_string)
    logger.info(f"Stored string {db_string.id}")
    return db_string


def get_string_by_value(db: Session, value: str) -> Optional[StringRecord]:
    """Get string record by exact value"""
    return db.query(StringRecord).filter(StringRecord.value == value).first()


def condition_to_clause(condition: Condition):
    """Translate a declarative condition into a SQLAlchemy clause"""
    column = getattr(StringRecord, condition.field)

    if condition.op == EQ:
        return column == condition.value
    if condition.op == GT:
        return column > condition.value
    if condition.op == LT:
        return column < condition.value
    if condition.op == RANGE:
        low, high = condition.value
        bounds = []
        if low is not None:
            bounds.append(column >= low)
        if high is not None:
            bounds.append(column <= high)
        return and_(*bounds)
    if condition.op == CONTAINS:
        return column.icontains(condition.value, autoescape=True)
    if condition.op == CONTAINS_ANY:
        return or_(*[
            column.icontains(ch, autoescape=True)
            for ch in condition.value
        ])
    raise ValueError(f"Unsupported filter operator: {condition.op}")


def get_all_strings(db: Session, conditions: List[Condition]) -> List[StringRecord]:
    """Get all strings matching every condition, newest first"""
    query = db.query(StringRecord)

    clauses = [condition_to_clause(c) for c in conditions]
    if clauses:
        query = query.filter(and_(*clauses))

    return query.order_by(desc(StringRecord.created_at), desc(StringRecord.id)).all()


def delete_string(db: Session, value: str) -> bool:
    """Delete string record by value"""
    db_string = get_string_by_value(db, value)
    if db_string:
        record_id = db_string.id
        db.delete(db_string)
        db.commit()
        logger.info(f"Deleted string {record_id}")
        return True
    return False
