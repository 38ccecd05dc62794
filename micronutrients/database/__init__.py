"""
Micronutrients Database Package

SQLite storage (aiosqlite) for:
- Reference micronutrient guidelines
- Country name -> guideline source mapping
- Client requirement history (one active record per client)
"""

from .db_setup import initialize_database, get_db, reset_database, get_database_stats
from .guideline_operations import (
    NotesFilter,
    find_guideline,
    insert_guideline,
    list_guidelines,
    get_country_mapping,
    get_country_guideline_source,
    upsert_country_mapping,
)
from .requirement_operations import (
    save_client_requirements,
    get_active_client_requirements,
    get_client_requirements_history,
)

__all__ = [
    # Database setup
    "initialize_database",
    "get_db",
    "reset_database",
    "get_database_stats",

    # Reference guidelines
    "NotesFilter",
    "find_guideline",
    "insert_guideline",
    "list_guidelines",
    "get_country_mapping",
    "get_country_guideline_source",
    "upsert_country_mapping",

    # Client requirements
    "save_client_requirements",
    "get_active_client_requirements",
    "get_client_requirements_history",
]
