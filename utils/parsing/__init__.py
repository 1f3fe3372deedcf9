# Parsing subpackage - model output parsing utilities
from .json import extract_json_object, repair_and_parse_json

__all__ = [
    "extract_json_object",
    "repair_and_parse_json",
]
