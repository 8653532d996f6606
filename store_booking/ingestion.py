import logging
import pandas as pd
from pathlib import Path
from typing import Dict, Type
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.engine import Engine

from . import models
from .schemas import DateOverride, WeeklyHours

logger = logging.getLogger(__name__)

HOURS_FILE = "store_hours.json"
OVERRIDES_FILE = "store_overrides.json"


def read_records(path: Path, schema: Type[BaseModel]) -> pd.DataFrame:
    """
    Reads a JSON array of records and validates every row against a schema.

    Time strings are kept as text; a malformed one raises a pydantic
    ValidationError instead of being coerced.
    """
    df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    if df.empty:
        return pd.DataFrame(columns=list(schema.model_fields))

    default_ids = pd.Series([f"{path.stem}-{i}" for i in range(len(df))], index=df.index)
    if "id" not in df.columns:
        df["id"] = default_ids
    else:
        df["id"] = df["id"].where(df["id"].notna(), default_ids)
    df["id"] = df["id"].astype(str)

    validated = [schema(**row).model_dump() for row in df.to_dict(orient="records")]
    return pd.DataFrame(validated, columns=list(schema.model_fields))


def ingest_json_data(engine: Engine, data_dir_path: Path) -> Dict[str, int]:
    """
    Replaces the stored hours and overrides with the JSON files in a directory.

    Args:
        engine: The SQLAlchemy database engine.
        data_dir_path: Directory holding store_hours.json and store_overrides.json.

    Returns:
        A dictionary with the count of rows inserted for each table.
    """
    files = {
        models.StoreHours.__tablename__: (data_dir_path / HOURS_FILE, WeeklyHours),
        models.StoreOverride.__tablename__: (data_dir_path / OVERRIDES_FILE, DateOverride),
    }
    # Validate everything before touching the tables.
    frames = {table: read_records(path, schema) for table, (path, schema) in files.items()}
    counts = {}

    with engine.connect() as conn:
        for table in frames:
            conn.execute(text(f"DELETE FROM {table}"))

        for table, df in frames.items():
            if not df.empty:
                df.to_sql(table, conn, if_exists="append", index=False)
            counts[table] = len(df)
            logger.info("Loaded %d row(s) into %s", len(df), table)

        conn.commit()

    return counts
