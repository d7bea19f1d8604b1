"""
Row decoding helpers shared by the models.
SQLite stores list/sub-record fields as JSON text and flags as integers;
these helpers turn rows into plain dicts with Python values.
"""

import json


def decode_json(value, default):
    """Decode a JSON text column, falling back to default for empty/invalid text."""
    if value is None or value == '':
        return default
    if isinstance(value, (list, dict)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return default


def encode_json(value) -> str:
    """Encode a list/dict for storage in a JSON text column."""
    return json.dumps(value if value is not None else None)


def row_to_dict(row, json_fields: dict = None, bool_fields: tuple = ()) -> dict:
    """
    Convert a sqlite3.Row to a dict.

    Args:
        row: sqlite3.Row or None
        json_fields: Mapping of column name -> default value for JSON columns
        bool_fields: Integer flag columns to expose as booleans

    Returns:
        dict or None when row is None
    """
    if row is None:
        return None

    record = dict(row)
    for field, default in (json_fields or {}).items():
        if field in record:
            record[field] = decode_json(record[field], default)
    for field in bool_fields:
        if field in record:
            record[field] = bool(record[field])
    return record


def build_update(allowed_fields, values: dict, json_fields=(), bool_fields=()):
    """
    Build the SET clause for a partial update.

    Args:
        allowed_fields: Columns that may be updated
        values: Incoming field values
        json_fields: Columns encoded as JSON
        bool_fields: Columns stored as 0/1

    Returns:
        Tuple of (list of 'column = ?' fragments, list of parameters)
    """
    updates = []
    params = []

    for field in allowed_fields:
        if field not in values:
            continue
        value = values[field]
        if field in json_fields:
            value = encode_json(value)
        elif field in bool_fields:
            value = 1 if value else 0
        updates.append(f'{field} = ?')
        params.append(value)

    return updates, params
