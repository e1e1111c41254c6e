"""
Turns the raw `##` delimited status pages into records.

The pages look something like this (truncated):
    192.168.100.1##00:A0:BC:12:34:56##UT_3.7.8.9.5##...##1,234,567##...##12.5##87%##...

There are no keys, only positions. See schema.py for what each position means.
"""

import math
import re

import structlog
from err.exceptions import NumericFormatError, SchemaMismatchError
from surfbeam2.models import match_category
from surfbeam2.schema import FieldRule, FieldSpec, Schema
from util.const import FIELD_DELIMITER

log = structlog.get_logger(__name__)

_DIGITS = re.compile(r"[0-9]+")
# Plain decimal, optional exponent. No "nan", "inf", "_" or padding
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

UINT64_MAX = 2**64 - 1
UINT16_MAX = 2**16 - 1


def split_fields(raw: str, delimiter: str = FIELD_DELIMITER) -> list[str]:
    """Split on the literal delimiter. Empty fields are kept; positions matter."""
    return raw.split(delimiter)


def _parse_uint(spec: FieldSpec, raw: str, limit: int) -> int:
    if _DIGITS.fullmatch(raw) is None:
        raise NumericFormatError(spec.name, raw)
    value = int(raw)
    if value > limit:
        raise NumericFormatError(spec.name, raw)
    return value


def _parse_float(spec: FieldSpec, raw: str) -> float:
    if _DECIMAL.fullmatch(raw) is None:
        raise NumericFormatError(spec.name, raw)
    value = float(raw)
    # 1e999 is a valid decimal but not a reading
    if not math.isfinite(value):
        raise NumericFormatError(spec.name, raw)
    return value


def decode_field(spec: FieldSpec, raw: str):
    """Apply the rule for one field. Raises NumericFormatError for anything that should be a number but isn't."""
    if spec.rule is FieldRule.TEXT:
        return raw

    if spec.rule is FieldRule.UINT:
        # Counters come with thousands separators: '1,234,567'
        return _parse_uint(spec, raw.replace(",", ""), UINT64_MAX)

    if spec.rule is FieldRule.PERCENT:
        return _parse_uint(spec, raw.removesuffix("%"), UINT16_MAX)

    if spec.rule is FieldRule.FLOAT:
        return _parse_float(spec, raw)

    if spec.rule is FieldRule.CATEGORY:
        return match_category(raw, spec.categories)

    raise ValueError(f"No decoder for rule {spec.rule}")


def decode(raw: str, schema: Schema, delimiter: str = FIELD_DELIMITER):
    """Decode a full status page into a new `schema.record_cls` instance.

    Raises:
        SchemaMismatchError: field count doesn't match; page layout changed or the read was partial.
        NumericFormatError: a numeric field couldn't be parsed. Whole record is abandoned.
    """
    segments = split_fields(raw, delimiter)
    if len(segments) != schema.expected_count:
        raise SchemaMismatchError(schema.name, schema.expected_count, len(segments))

    # Collect everything first and build the record in one go; it's all or nothing
    values = {spec.name: decode_field(spec, segments[spec.index]) for spec in schema.fields}
    log.debug("Decoded page", schema=schema.name, fields=len(values))
    return schema.record_cls(**values)


def encode_field(spec: FieldSpec, value) -> str:
    if spec.rule is FieldRule.CATEGORY:
        # Write back the keyword that maps to this variant; UNKNOWN has none
        for keyword, variant in spec.categories:
            if variant is value:
                return keyword
        return ""
    if spec.rule is FieldRule.PERCENT:
        return f"{value}%"
    if spec.rule is FieldRule.FLOAT:
        return repr(float(value))
    return str(value)


def encode(record, schema: Schema, delimiter: str = FIELD_DELIMITER) -> str:
    """Inverse of decode(); unmapped positions are left empty. Handy for building test pages."""
    segments = [""] * schema.expected_count
    for spec in schema.fields:
        segments[spec.index] = encode_field(spec, getattr(record, spec.name))
    return delimiter.join(segments)
