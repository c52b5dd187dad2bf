import logging
import os
from contextlib import contextmanager
from pathlib import Path

import boto3
import psycopg2
import watchtower
from botocore.exceptions import BotoCoreError, ClientError

from json_migration.config import build_dsn, masked_url
from json_migration.errors import DatabaseConnectionError, InputReadError

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level="INFO"):
    handlers = [logging.StreamHandler()]  # Log to console

    log_group = os.getenv("CLOUDWATCH_LOG_GROUP")
    if log_group:
        # Send logs to CloudWatch
        handlers.append(watchtower.CloudWatchLogHandler(log_group=log_group))

    logging.basicConfig(level=level, format=LOG_FORMAT,
                        handlers=handlers, force=True)


@contextmanager
def get_db_connection(settings):
    """Open a PostgreSQL connection and always close it on the way out."""
    dsn = build_dsn(settings)
    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.Error as e:
        logger.error(f"Database connection failed: {e}")
        raise DatabaseConnectionError(
            f"Could not connect to {masked_url(dsn)}: {e}") from e

    logger.info(
        f"Connected to PostgreSQL at {settings.host}:{settings.port}, Database: {settings.name}")
    try:
        yield conn
    finally:
        conn.close()
        logger.info("Connection closed.")


def _split_s3_path(path):
    bucket, _, key = path[len("s3://"):].partition("/")
    if not bucket or not key:
        raise InputReadError(f"Invalid S3 path: {path}")
    return bucket, key


def read_from_s3(path):
    bucket, key = _split_s3_path(path)
    logger.info(f"Downloading {key} from S3 bucket {bucket}...")
    try:
        obj = boto3.client("s3").get_object(Bucket=bucket, Key=key)
        return obj["Body"].read()
    except (BotoCoreError, ClientError) as e:
        raise InputReadError(f"Could not read {path}: {e}") from e


def read_input(path):
    """Read the whole input file (local path or s3://bucket/key) into bytes."""
    path = str(path)
    if path.startswith("s3://"):
        data = read_from_s3(path)
    else:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise InputReadError(f"Could not read {path}: {e}") from e

    logger.info(f"Read {len(data)} bytes from {path}")
    return data
