"""
JSON formatting utilities.

Edge lists are long runs of small integers. Standard json.dumps() with an
indent puts every one of them on its own line, which makes a report for a
mesh with a few hundred bad edges thousands of lines long. These helpers keep
number arrays on one line while leaving the rest of the structure indented.
"""

import json
import re
from typing import Any, List, Optional

from .constants import COMPACT_JSON_FIELDS

# A multi-line array holding only numbers, as json.dumps(indent=...) prints it
_NUMBER_ARRAY = r'\[\s*\n\s*([\d\.\-\+eE,\s]+?)\n\s*\]'


def _collapse(numbers: str) -> str:
    return '[' + re.sub(r'\s+', ' ', numbers.strip()) + ']'


def dumps_compact_arrays(
    data: Any,
    indent: int = 2,
    array_fields: Optional[List[str]] = None
) -> str:
    """
    Format JSON with number arrays on single lines.

        "non_manifold_edges": [
          0,
          1
        ]

    becomes

        "non_manifold_edges": [0, 1]

    Args:
        data: Data structure to serialize
        indent: Number of spaces for indentation (default: 2)
        array_fields: Field names whose arrays should be compacted. Defaults
            to the edge/face list fields of a topology report; pass an empty
            list to compact every array of numbers.

    Returns:
        JSON string with compact arrays and indented structure
    """
    json_str = json.dumps(data, indent=indent, ensure_ascii=False)

    if array_fields is None:
        array_fields = COMPACT_JSON_FIELDS

    if not array_fields:
        return re.sub(_NUMBER_ARRAY, lambda m: _collapse(m.group(1)), json_str)

    for name in array_fields:
        pattern = rf'"{re.escape(name)}":\s*' + _NUMBER_ARRAY
        json_str = re.sub(
            pattern,
            lambda m, name=name: f'"{name}": ' + _collapse(m.group(1)),
            json_str
        )

    return json_str
