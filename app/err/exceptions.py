"""Simple wrappers for the failure states seen while polling / decoding the modem pages"""


class TransportError(Exception):
    """Exception for any failure to get a page back from the modem."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message, status_code, payload)
        self.status_code = status_code


class ModemNotOkError(TransportError):
    """Exception for non-200/OK responses from modem."""


class SchemaDefinitionError(ValueError):
    """A field table does not describe a usable layout (bad index, unknown field ... etc)."""


class DecodeError(Exception):
    """Base for anything that goes wrong while turning a raw page into a record."""


class SchemaMismatchError(DecodeError):
    """Number of `##` delimited fields is not what the schema expects.

    Almost always a firmware update that changed the page layout.
    """

    def __init__(self, schema_name: str, expected: int, actual: int):
        super().__init__(
            f"{schema_name}: expected {expected} fields but got {actual}"
        )
        self.schema_name = schema_name
        self.expected = expected
        self.actual = actual


class NumericFormatError(DecodeError):
    """A field that should be numeric could not be parsed."""

    def __init__(self, field: str, raw: str):
        super().__init__(f"Field {field!r} is not numeric: {raw!r}")
        self.field = field
        self.raw = raw
