# src/logictest_core/parser/__init__.py
from .raw_data import ParsedBoardNode, ParsedComponentData, ParsedDesign
from .parser import NetlistParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    # IR Data Structures
    "ParsedBoardNode",
    "ParsedComponentData",
    "ParsedDesign",
    # Parser and Exceptions
    "NetlistParser",
    "ParsingError",
    "SchemaValidationError",
]
