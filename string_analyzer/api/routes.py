from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from string_analyzer.config import get_palindrome_mode
from string_analyzer.database import get_db
from string_analyzer.crud import string_record as crud
from string_analyzer.exceptions import (
    DuplicateStringError,
    InvalidFilterError,
    UnparseableQueryError,
)
from string_analyzer.models.string_record import StringRecord
from string_analyzer.schemas.string_record import (
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringProperties,
    StringResponse,
)
from string_analyzer.services.analyzer import analyze_string
from string_analyzer.services.natural_language import interpret_query
from string_analyzer.services.query_filters import build_filters

router = APIRouter(prefix="/strings")
logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "String does not exist in the system"


def build_string_response(record: StringRecord) -> StringResponse:
    return StringResponse(
        id=record.id,
        value=record.value,
        properties=StringProperties(
            length=record.length,
            is_palindrome=record.is_palindrome,
            unique_characters=record.unique_characters,
            word_count=record.word_count,
            sha256_hash=record.sha256_hash,
            character_frequency_map=record.character_frequency_map,
        ),
        created_at=record.created_at,
    )


# Static paths are registered before /strings/{string_value} so that
# "filter-by-natural-language" is never captured as a value.

@router.get("/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    db: Session = Depends(get_db),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="query parameter must not be empty",
        )

    try:
        filters = interpret_query(query)
    except UnparseableQueryError as e:
        logger.warning(f"Could not interpret query '{query}'")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    strings = crud.get_all_strings(db, filters.conditions)
    data = [build_string_response(s) for s in strings]

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=filters.applied),
    )


@router.post("", response_model=StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(
    string_data: StringCreate,
    db: Session = Depends(get_db),
    palindrome_mode: str = Depends(get_palindrome_mode),
):
    """
    Analyze and store a string.
    Returns 409 if the string already exists.
    """
    properties = analyze_string(string_data.value, palindrome_mode)

    try:
        db_string = crud.create_string_record(db, string_data.value, properties)
    except DuplicateStringError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return build_string_response(db_string)


@router.get("", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="'true' or 'false'"),
    min_length: Optional[str] = Query(None, description="Minimum length (inclusive)"),
    max_length: Optional[str] = Query(None, description="Maximum length (inclusive)"),
    word_count: Optional[str] = Query(None, description="Exact number of words"),
    contains_character: Optional[str] = Query(None, description="Single character, case-insensitive"),
    db: Session = Depends(get_db),
):
    """
    Get all strings with optional filtering.
    """
    try:
        filters = build_filters({
            "is_palindrome": is_palindrome,
            "min_length": min_length,
            "max_length": max_length,
            "word_count": word_count,
            "contains_character": contains_character,
        })
    except InvalidFilterError as e:
        logger.warning(f"Rejected filter {e.parameter}: {e.message}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

    strings = crud.get_all_strings(db, filters.conditions)
    data = [build_string_response(s) for s in strings]

    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.applied,
    )


@router.get("/{string_value}", response_model=StringResponse)
def get_string(string_value: str, db: Session = Depends(get_db)):
    """
    Get analysis for a specific string.
    Returns 404 if the string doesn't exist.
    """
    db_string = crud.get_string_by_value(db, string_value.strip())
    if not db_string:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)

    return build_string_response(db_string)


@router.delete("/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, db: Session = Depends(get_db)):
    """
    Delete a string from the system.
    Returns 404 if the string doesn't exist.
    """
    success = crud.delete_string(db, string_value.strip())
    if not success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    return None
