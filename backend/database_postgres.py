"""
PostgreSQL database connection and schema management.

Connects to PostgreSQL using DATABASE_URL (preferred) or individual
PGHOST/PGPORT/PGUSER/PGPASSWORD/PGDATABASE environment variables, and
falls back to a local server when neither is set.
"""

import os
import logging
import psycopg2
from psycopg2.extras import RealDictCursor
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/snake_game"


def get_connection_string() -> str:
    """
    Get the PostgreSQL connection string.

    Priority:
    1. DATABASE_URL environment variable
    2. Individual PG* environment variables (PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE)
    3. DEFAULT_DATABASE_URL (local development server)

    Returns:
        Connection string for PostgreSQL
    """
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return database_url

    pghost = os.getenv('PGHOST')
    pgport = os.getenv('PGPORT', '5432')
    pguser = os.getenv('PGUSER')
    pgpassword = os.getenv('PGPASSWORD')
    pgdatabase = os.getenv('PGDATABASE')

    if pghost and pguser and pgpassword and pgdatabase:
        return f"postgresql://{pguser}:{pgpassword}@{pghost}:{pgport}/{pgdatabase}"

    return DEFAULT_DATABASE_URL


def get_connection():
    """
    Get a database connection to PostgreSQL.

    Returns:
        psycopg2 connection with RealDictCursor (returns rows as dictionaries)
    """
    try:
        conn_string = get_connection_string()
        conn = psycopg2.connect(conn_string, cursor_factory=RealDictCursor)
        return conn
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise


def init_database() -> None:
    """
    Initialize the scores schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS scores (
                id SERIAL PRIMARY KEY,
                score INTEGER NOT NULL,
                duration INTEGER NOT NULL,
                date TEXT,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_scores_score ON scores(score DESC, id ASC)")

        conn.commit()
        print("[OK] Scores schema initialized")

    except Exception as e:
        conn.rollback()
        print(f"[ERROR] Failed to initialize schema: {e}")
        print("Make sure DATABASE_URL is set correctly.")
        raise
    finally:
        cursor.close()
        conn.close()


if __name__ == "__main__":
    print("Initializing PostgreSQL schema...")
    init_database()
