"""Schema serialization.

A schema serializes as a map of rule name to rule payload, plus a ``type``
key naming the schema type::

    {"type": "int", "required": true, "min": 3}

Decoding is strict: unknown rule names, unknown types and ill-typed
payloads raise ``SchemaDecodeError``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import msgspec

from .error import SchemaDecodeError
from .rules import RULES, RuleSet
from .schema import SCHEMAS, Schema

log = logging.getLogger(__name__)


def ruleset_to_builtins(rules: RuleSet) -> dict[str, Any]:
    return {rule.key: rule.encode(to_builtins) for rule in rules}


def ruleset_from_builtins(data: Any) -> RuleSet:
    if not isinstance(data, dict):
        raise SchemaDecodeError(f"expected a map of rules, received {type(data).__name__}")

    rules = RuleSet()
    for key, payload in data.items():
        rule_cls = RULES.get(key)
        if rule_cls is None:
            raise SchemaDecodeError(f"rule '{key}' not found", key)
        try:
            rules = rules.add(rule_cls.decode(payload, from_builtins))
        except (msgspec.ValidationError, TypeError) as err:
            raise SchemaDecodeError(f"{key}: {err}", key) from err
    return rules


def to_builtins(schema: Schema) -> dict[str, Any]:
    """Lower a schema to plain data."""
    return {"type": schema.type_name, **ruleset_to_builtins(schema.rules)}


def from_builtins(data: Any) -> Schema:
    """Build a schema from plain data; a missing ``type`` means ``any``."""
    if not isinstance(data, dict):
        raise SchemaDecodeError(f"expected a schema map, received {type(data).__name__}")

    data = dict(data)
    type_name = data.pop("type", "any")
    schema_cls = SCHEMAS.get(type_name) if isinstance(type_name, str) else None
    if schema_cls is None:
        raise SchemaDecodeError(f"schema type '{type_name}' not found", "type")
    return schema_cls(ruleset_from_builtins(data))


def encode(schema: Schema) -> bytes:
    return msgspec.json.encode(to_builtins(schema))


def decode(data: bytes | str) -> Schema:
    try:
        raw = msgspec.json.decode(data)
    except msgspec.DecodeError as err:
        raise SchemaDecodeError(str(err)) from err
    return from_builtins(raw)


def encode_yaml(schema: Schema) -> bytes:
    return msgspec.yaml.encode(to_builtins(schema))


def decode_yaml(data: bytes | str) -> Schema:
    try:
        raw = msgspec.yaml.decode(data)
    except msgspec.DecodeError as err:
        raise SchemaDecodeError(str(err)) from err
    return from_builtins(raw)


def load(path: str | Path) -> Schema:
    """Load a schema from a ``.json``, ``.yaml`` or ``.yml`` file."""
    p = Path(path)
    data = p.read_bytes()
    if p.suffix in (".yaml", ".yml"):
        schema = decode_yaml(data)
    else:
        schema = decode(data)
    log.debug("loaded %s schema from %s", schema.type_name, p)
    return schema
