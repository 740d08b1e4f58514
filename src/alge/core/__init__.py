"""
Core package aggregator for alge contracts (grammar, descriptors, ordering, catalog).

## Contracts (single source of truth)
- Grammar: TypeKind / PrimitiveKind enums and normalization helpers.
- Descriptors: frozen type descriptors with construction-time validation,
  structural membership (`contains`) and the union operator (`|`).
- Ordering: explicit subtype order and record merge (`+`).
- Catalog: example schemas used by the CLI and tests.
- Errors: construction-time exceptions.

## Notes
- Zero-IO policy: stdlib only; no file/network IO.
- No registry of named types: descriptors are plain values passed explicitly.

## Downstream usage
- alge.serde: converts generic values (as produced by e.g. `json.loads`) into
  validated values by dispatching on `TypeKind`.
- alge.cli: lists and checks against catalog schemas.

## Examples
```python
from alge.core.descriptors import INTEGER, STRING, Alias, record_of, tuple_of

Currency = Alias("Currency", STRING)
Amount = tuple_of(INTEGER, Currency)
Amount.contains((100, "usd"))  # True
record_of(code=INTEGER) + record_of(message=STRING)  # Record{message: String, code: Integer}
```
"""
