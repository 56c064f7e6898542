"""
pagefit - content-fit layout optimization for CV rendering

Estimates how much vertical space a structured CV needs on a fixed-size page
without rendering it, and picks a layout configuration (fonts, spacing,
sidebar, margins) that the PDF renderer should use.

Architecture:
- Templating Context: CV document data model and parsing from CV-data mappings
- Rendering Context: Content metrics estimation and layout policy selection
"""

from loguru import logger

__version__ = "0.1.0"

# Silent as a library; entry points call logger.enable("pagefit")
logger.disable("pagefit")
