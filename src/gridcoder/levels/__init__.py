"""Bundled levels and their file exchange format."""

from .catalog import LEVELS, get_level
from .self_check import SolutionCheck, check_reference_solutions
from .storage import LevelFormatError, dump_levels, export_levels, import_levels, load_levels, write_summary

__all__ = [
    "LEVELS",
    "LevelFormatError",
    "SolutionCheck",
    "check_reference_solutions",
    "dump_levels",
    "export_levels",
    "get_level",
    "import_levels",
    "load_levels",
    "write_summary",
]
