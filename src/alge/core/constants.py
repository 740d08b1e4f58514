"""
alge core defaults.

Defines the engine defaults consumed by alge.serde options and settings. This
module is zero-IO and uses only the Python standard library.

Notes:
    - alge.serde.config.SerdeSettings sources its defaults from here.
    - The depth limit guards the recursive engine against adversarially deep
      input; it is a strengthening over unbounded recursion, not a change in
      conversion semantics.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "PARSE_NUMERIC_STRINGS",
]

# Maximum nesting depth of a single deserialize call. Each level costs a few
# Python frames, so this stays well below the interpreter recursion limit.
DEFAULT_MAX_DEPTH: int = 200

# Whether Integer/Float conversions accept numeric strings such as "3" or "3.5".
PARSE_NUMERIC_STRINGS: bool = True
