class MigrationError(Exception):
    """Base class for every failure that aborts a migration run."""


class ConfigError(MigrationError):
    pass


class DatabaseConnectionError(MigrationError, ConnectionError):
    pass


class InputReadError(MigrationError, IOError):
    pass


class ParseError(MigrationError, ValueError):
    pass


class MissingFieldError(MigrationError, LookupError):
    def __init__(self, field, record_index):
        self.field = field
        self.record_index = record_index
        super().__init__(
            f"Key '{field}' not found in JSON data (record {record_index})")


class InsertError(MigrationError):
    def __init__(self, table, original):
        self.table = table
        self.original = original
        super().__init__(f"Insert into {table} failed: {original}")
