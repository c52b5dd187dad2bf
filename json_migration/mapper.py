"""
Turn a raw JSON array into the pieces of a multi-row INSERT.

Columns, placeholders and values all follow the mapping's declaration order,
so the i-th placeholder group binds values[i * n:(i + 1) * n] where n is the
number of mapped fields.
"""

import json
import logging
from collections import namedtuple

from json_migration.config import validate_mapping
from json_migration.errors import MissingFieldError, ParseError

logger = logging.getLogger(__name__)


MappedRows = namedtuple("MappedRows", ["columns", "placeholders", "values"])


def parse_records(raw):
    """Decode a JSON array of flat objects."""
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ParseError(
            f"Expected a JSON array of objects, got {type(data).__name__}")

    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ParseError(
                f"Record {i} is {type(record).__name__}, expected an object")
    return data


def placeholder_group(size, placeholder="%s"):
    return "(" + ", ".join([placeholder] * size) + ")"


def map_records(raw, mapping, placeholder="%s"):
    validate_mapping(mapping)
    records = parse_records(raw)

    columns = list(mapping.values())
    group = placeholder_group(len(mapping), placeholder)
    placeholders = []
    values = []

    for index, record in enumerate(records):
        for field in mapping:
            if field not in record:
                raise MissingFieldError(field, index)
            value = record[field]
            if isinstance(value, (dict, list)):
                raise ParseError(
                    f"Nested value for '{field}' in record {index} is not supported")
            values.append(value)
        placeholders.append(group)

    logger.debug(
        f"Mapped {len(records)} records onto columns {', '.join(columns)}")
    return MappedRows(columns, placeholders, values)
