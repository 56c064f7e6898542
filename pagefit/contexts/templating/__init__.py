"""
Templating Context

Responsibilities:
- Owns the CV document representation consumed by layout estimation
- Converts CV-data mappings (camelCase or snake_case keys) into immutable documents
- Normalizes loose shapes (skills string/list/categories, achievements vs content)

Owns: CV document data model, parsing of CV-data mappings
Never: Estimates heights or makes layout decisions
"""

from pagefit.contexts.templating.cv_data_structure import (
    Contact,
    CVDocument,
    Entry,
    Identity,
    flatten_skills,
)
from pagefit.contexts.templating.exceptions import InvalidCVStructureError

__all__ = [
    # Data structure classes
    "CVDocument",
    "Identity",
    "Contact",
    "Entry",
    # Helpers
    "flatten_skills",
    # Errors
    "InvalidCVStructureError",
]
