import argparse
import logging
import os
import sys

from json_migration import config
from json_migration.errors import ConfigError, MigrationError
from json_migration.inserter import insert_rows
from json_migration.mapper import map_records
from json_migration.models.result import MigrationResult
from json_migration.utils import get_db_connection, read_input, setup_logging

logger = logging.getLogger(__name__)

# psycopg2 binds positional parameters with %s
PLACEHOLDER = "%s"


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Bulk-insert a JSON array file into a database table")
    p.add_argument("--file", default=None,
                   help="JSON array to load (local path or s3://bucket/key)")
    p.add_argument("--table", default=None, help="destination table")
    p.add_argument("--map", dest="map_items", action="append", default=[],
                   metavar="FIELD=COLUMN",
                   help="map a JSON field to a column; repeat in column order")
    p.add_argument("--mapping-file", default=None,
                   help="JSON object of field -> column")
    p.add_argument("--env-file", default=None,
                   help=".env file with the DB_* settings")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def resolve_mapping(args):
    if args.map_items and args.mapping_file:
        raise ConfigError("Use either --map or --mapping-file, not both")
    if args.map_items:
        return config.parse_map_items(args.map_items)
    if args.mapping_file:
        return config.load_mapping_file(args.mapping_file)
    return dict(config.DEFAULT_MAPPING)


def run_migration(conn, file_path, table, mapping, placeholder=PLACEHOLDER):
    """Read, map and insert one file over an already open connection."""
    raw = read_input(file_path)
    rows = map_records(raw, mapping, placeholder)
    inserted = insert_rows(conn, table, rows)

    if rows.placeholders:
        message = f"{inserted} records inserted into {table}"
    else:
        message = f"No records to insert into {table}"
    return MigrationResult(message=message, table=table, inserted=inserted)


def migrate(args):
    config.load_env(args.env_file)
    settings = config.load_db_settings()
    mapping = resolve_mapping(args)
    table = args.table or os.getenv("MIGRATION_TABLE") or config.DEFAULT_TABLE
    file_path = args.file or os.getenv(
        "MIGRATION_FILE") or config.DEFAULT_INPUT_FILE

    logger.info(f"Starting migration of {file_path} into {table}...")
    with get_db_connection(settings) as conn:
        result = run_migration(conn, file_path, table, mapping)
    logger.info(f"Migration completed: {result.message}")
    return result


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        result = migrate(args)
    except MigrationError as e:
        logger.error(f"Migration failed: {e}")
        sys.exit(1)

    if result.inserted:
        print("Data inserted successfully.")
    else:
        print(f"{result.message}.")
    return result


if __name__ == "__main__":
    main()
