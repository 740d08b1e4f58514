"""
alge.serde: deserialization engine for alge descriptors.

## Responsibilities
- Convert generic values (the output of `json.loads` and friends) into values
  validated against an alge.core descriptor, or fail with one structured error.
- Dispatch by `TypeKind` through an explicit strategy table; no class-keyed
  lookup and no mutable global registry.
- Carry per-call policy in a pydantic `DeserializeOptions` model and runtime
  defaults in `SerdeSettings` (env > TOML > defaults).

## Public API
- engine: `deserialize`, `Deserializer`, `Validator`, `converter_for`.
- converters: per-kind strategies and the `CONVERTERS` table.
- options: `DeserializeOptions` (target hook, depth limit, numeric strings).
- config: `SerdeSettings` loaders.
- errors: `DeserializationError` hierarchy with breadcrumb paths.
- logging: `configure_logging` (structlog). The package itself only attaches a
  NullHandler to the `alge` logger, so it stays silent until configured.

## Import DAG discipline
- Depends on stdlib, pydantic, structlog and alge.core.*.
- MUST NOT import alge.cli.

## Examples
```python
import json
from alge.core.catalog import RESULT
from alge.serde.engine import deserialize
from alge.serde.errors import DeserializationError

deserialize(RESULT, json.loads('{"code": 404, "message": "missing"}'))
try:
    deserialize(RESULT, {"object": "ack", "data": {"b": [1]}})
except DeserializationError as exc:
    print(exc)  # None of [Record{...}, Record{...}] matched value ...
```
"""

from __future__ import annotations

import logging

logging.getLogger("alge").addHandler(logging.NullHandler())
