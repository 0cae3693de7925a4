import os
import re
from typing import List, Optional

from ohaclient.common.errors import ValidationError

# Matched with fullmatch(), so no anchors
INT_PATTERN = re.compile(r"[0-9]+")
FILENAME_PATTERN = re.compile(r"[a-zA-Z0-9_.\-/]+")
QUERY_PATTERN = re.compile(r"[a-zA-Z0-9!@#$%^&*()_+=.-]*")

def is_string_int(value: str) -> bool:
    return INT_PATTERN.fullmatch(value) is not None

def is_valid_filename(value: str) -> bool:
    return FILENAME_PATTERN.fullmatch(value) is not None

def validate_int(value: Optional[str]) -> str:
    """
    Accepts only strings made entirely of ASCII digits (algorithm ids,
    user ids, line counts). Returned unchanged as a string.
    """
    if value is None:
        raise ValidationError("Invalid Number Input")
    if not is_string_int(value):
        raise ValidationError(f"Invalid Number Input: {value}")
    return value

def validate_file(value: Optional[str]) -> str:
    if value is None:
        raise ValidationError("file argument not found")
    if not is_valid_filename(value):
        raise ValidationError("Filename contained invalid characters")
    if not os.path.isfile(value):
        raise ValidationError(f"file not found: {value}")
    return value

def validate_query(value: Optional[str]) -> str:
    # Optional argument: absent means empty
    if value is None:
        return ""
    if QUERY_PATTERN.fullmatch(value) is None:
        raise ValidationError("Query string contains invalid characters")
    return value

def validate_list_name(value: Optional[str]) -> str:
    name = validate_query(value)
    if not name:
        raise ValidationError("List name must not be empty")
    return name

def read_lines(path: str) -> List[str]:
    """
    Reads a whole file and splits it on \\n, dropping a trailing \\r from each
    line. A final newline does not produce an empty last entry.
    """
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        content = f.read()
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

def read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()
