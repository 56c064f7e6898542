"""
Shared utilities for pagefit.

Common functionality used across contexts:
- Text list cleaning
- Logger setup
"""

from pagefit.utils.text_processing import clean_text_list, split_comma_list

__all__ = ["clean_text_list", "split_comma_list"]
