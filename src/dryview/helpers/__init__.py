"""
View helpers: value formatting, HTML sections, tables, forms and action links.
"""

from dryview.helpers.form_builder import StandardFormBuilder, form_for
from dryview.helpers.standard import (
    CONFIRM_DELETE_MESSAGE,
    EMPTY_STRING,
    NO_LIST_ENTRIES_MESSAGE,
    StandardHelper,
)
from dryview.helpers.table_builder import StandardTableBuilder

__all__ = [
    "CONFIRM_DELETE_MESSAGE",
    "EMPTY_STRING",
    "NO_LIST_ENTRIES_MESSAGE",
    "StandardFormBuilder",
    "StandardHelper",
    "StandardTableBuilder",
    "form_for",
]
