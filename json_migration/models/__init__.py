from json_migration.models.result import MigrationResult
from json_migration.models.settings import DatabaseSettings

__all__ = ["DatabaseSettings", "MigrationResult"]
