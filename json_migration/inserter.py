import logging

from json_migration.errors import InsertError

logger = logging.getLogger(__name__)


def build_insert_query(table, columns, placeholders):
    """INSERT INTO table (c1, c2) VALUES (..), (..). Identifiers are not escaped."""
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES {', '.join(placeholders)}"


def insert_rows(conn, table, rows):
    """Insert every mapped row with a single statement and commit it."""
    if not rows.placeholders:
        logger.warning(f"No records to insert into {table}. Skipping...")
        return 0

    insert_query = build_insert_query(table, rows.columns, rows.placeholders)
    cursor = conn.cursor()
    try:
        cursor.execute(insert_query, rows.values)
        inserted = cursor.rowcount
        conn.commit()
    except Exception as e:
        try:
            conn.rollback()
        except Exception as rollback_error:
            logger.warning(f"Rollback on {table} failed: {rollback_error}")
        logger.error(f"Insert into {table} failed: {e}")
        raise InsertError(table, e) from e
    finally:
        cursor.close()

    if inserted is None or inserted < 0:
        inserted = len(rows.placeholders)
    logger.info(f"Inserted {inserted} records into {table}.")
    return inserted
