"""CSV loader for process observations.

Loads timing observations exported from the process store (or any
spreadsheet) into ProcessObservation models. Handles common issues:
encoding, delimiters, column name variants, duration units.
"""

import logging
import re
from io import StringIO
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from bottleneckiq.analysis.normalizer import to_seconds
from bottleneckiq.exceptions import ExtractionError, ValidationError
from bottleneckiq.models import DurationUnit, ProcessObservation

logger = logging.getLogger(__name__)

# Required columns (must be present after alias mapping)
REQUIRED_COLUMNS = {"name", "actual_duration", "average_duration", "status"}

# Common column name variations for auto-mapping
COLUMN_ALIASES: dict[str, list[str]] = {
    "name": [
        "name",
        "process",
        "process_name",
        "step",
        "step_name",
        "process_step",
    ],
    "process_id": ["process_id", "id", "step_id"],
    "actual_duration": [
        "actual_duration",
        "actual",
        "actual_time",
        "duration",
        "time_taken",
    ],
    "average_duration": [
        "average_duration",
        "average",
        "avg_duration",
        "expected",
        "expected_duration",
        "baseline",
        "target",
    ],
    "status": ["status", "state", "process_status"],
    "timestamp": ["timestamp", "recorded_at", "time", "date", "last_updated"],
}


def _normalize_column_name(col: str) -> str:
    """Normalize column name for matching (lowercase, strip, replace spaces).

    Also removes unit suffixes like (s), (ms), (seconds).
    """
    normalized = col.lower().strip()
    normalized = re.sub(r"\s*\([^)]*\)\s*$", "", normalized)
    normalized = normalized.replace(" ", "_").replace("-", "_")
    return normalized.rstrip("_")


def _map_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Map common column name variations to expected names."""
    column_mapping: dict[str, str] = {}
    normalized_cols = {_normalize_column_name(c): c for c in df.columns}

    for standard_name, aliases in COLUMN_ALIASES.items():
        if standard_name in df.columns:
            continue

        for alias in aliases:
            original_col = normalized_cols.get(_normalize_column_name(alias))
            if original_col is not None and original_col not in column_mapping:
                column_mapping[original_col] = standard_name
                logger.debug("Mapped column '%s' -> '%s'", original_col, standard_name)
                break

    if column_mapping:
        df = df.rename(columns=column_mapping)
        logger.info("Mapped %d columns to standard names", len(column_mapping))

    return df


def _validate_required_columns(df: pd.DataFrame) -> None:
    """Check that all required columns are present.

    Raises:
        ValidationError: If required columns are missing.
    """
    missing = REQUIRED_COLUMNS - set(df.columns)

    if missing:
        raise ValidationError(
            message=f"Missing required columns: {missing}",
            field="columns",
            value=str(list(df.columns)),
            user_message=f"The CSV is missing required columns: {', '.join(sorted(missing))}. "
            f"Expected columns: {', '.join(sorted(REQUIRED_COLUMNS))}",
        )


def _parse_csv_content(
    content: str | bytes,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """Parse CSV content into a string-typed DataFrame.

    Raises:
        ExtractionError: If parsing fails.
    """
    try:
        if isinstance(content, bytes):
            content = content.decode(encoding)

        df = pd.read_csv(
            StringIO(content),
            sep=delimiter,  # None = auto-detect
            engine="python" if delimiter is None else "c",
            on_bad_lines="warn",
            skip_blank_lines=True,
            dtype=str,
        )

        logger.debug("Parsed CSV with %d rows, %d columns", len(df), len(df.columns))
        return df

    except pd.errors.EmptyDataError as e:
        raise ExtractionError(
            message=f"CSV file is empty: {e}",
            source="csv",
            user_message="The CSV file is empty. Please provide a file with process data.",
        ) from e
    except pd.errors.ParserError as e:
        raise ExtractionError(
            message=f"Failed to parse CSV: {e}",
            source="csv",
            user_message="The CSV file could not be parsed. Check that it's properly formatted "
            "with consistent delimiters and no corrupted rows.",
        ) from e
    except UnicodeDecodeError as e:
        raise ExtractionError(
            message=f"Encoding error: {e}",
            source="csv",
            user_message=f"The file encoding is not {encoding}. Try saving the file as UTF-8.",
        ) from e


def _convert_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    """Convert duration and timestamp columns to typed values."""
    for col in ("actual_duration", "average_duration"):
        series = df[col].astype(str)
        # Strip unit words like "s", "sec", "seconds", "ms"
        series = series.str.replace(
            r"\s*(ms|milliseconds?|s|secs?|seconds?)\s*$", "", regex=True, case=False
        )
        series = series.str.replace(",", "", regex=False).str.strip()
        df[col] = pd.to_numeric(series, errors="coerce")

    if "timestamp" in df.columns:
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce", utc=True)

    return df


def _row_to_observation(row: dict[str, Any], unit: DurationUnit) -> ProcessObservation:
    """Build one observation from a typed row, normalizing durations."""
    timestamp = row.get("timestamp")
    return ProcessObservation(
        name=row["name"],
        process_id=row.get("process_id"),
        actual_duration=to_seconds(row["actual_duration"], unit),
        average_duration=to_seconds(row["average_duration"], unit),
        status=row["status"],
        timestamp=timestamp.to_pydatetime() if timestamp is not None else None,
    )


def _df_to_observations(df: pd.DataFrame, unit: DurationUnit) -> list[ProcessObservation]:
    """Convert DataFrame rows to observations, skipping invalid rows.

    Raises:
        ValidationError: If every row fails validation.
    """
    observations: list[ProcessObservation] = []
    errors: list[str] = []

    for idx, row in df.iterrows():
        row_num = int(idx) + 2 if isinstance(idx, int | float) else idx
        data = {str(k): v for k, v in row.to_dict().items() if pd.notna(v)}

        missing = [c for c in ("actual_duration", "average_duration") if c not in data]
        if missing:
            errors.append(f"Row {row_num}: non-numeric {', '.join(missing)}")
            logger.warning("Row %s has non-numeric %s", row_num, ", ".join(missing))
            continue

        try:
            observations.append(_row_to_observation(data, unit))
        except PydanticValidationError as e:
            errors.append(f"Row {row_num}: {e.error_count()} validation error(s)")
            logger.warning("Validation error in row %s: %s", row_num, e)
        except ValidationError as e:
            errors.append(f"Row {row_num}: {e}")
            logger.warning("Invalid row %s: %s", row_num, e)
        except KeyError as e:
            errors.append(f"Row {row_num}: missing {e}")
            logger.warning("Row %s is missing %s", row_num, e)

    if errors and not observations:
        raise ValidationError(
            message=f"All rows failed validation: {errors}",
            field="rows",
            user_message="All rows in the CSV failed validation. Please check the data format.",
        )

    if errors:
        logger.warning("Skipped %d invalid rows out of %d total", len(errors), len(df))

    return observations


def load_observations_csv(
    source: str | Path | BinaryIO | bytes,
    unit: DurationUnit | str = DurationUnit.SECONDS,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> list[ProcessObservation]:
    """Load process observations from a CSV file or content.

    Args:
        source: File path, file object, or raw CSV bytes.
        unit: Unit of the duration columns; converted to seconds.
        delimiter: CSV delimiter (auto-detect if None).
        encoding: Character encoding (default: utf-8).

    Returns:
        Validated observations in file order.

    Raises:
        ExtractionError: If the file cannot be read or parsed.
        ValidationError: If columns are missing or every row is invalid.

    Example:
        >>> observations = load_observations_csv("steps.csv", unit="milliseconds")
    """
    logger.info("Loading observations CSV from %s", type(source).__name__)
    unit = DurationUnit(unit)

    if isinstance(source, str | Path):
        path = Path(source)
        if not path.exists():
            raise ExtractionError(
                message=f"File not found: {path}",
                source=str(path),
                user_message=f"The file '{path.name}' was not found.",
            )
        content: bytes = path.read_bytes()
    elif isinstance(source, bytes):
        content = source
    else:
        raw = source.read()
        content = raw if isinstance(raw, bytes) else str(raw).encode(encoding)

    if not content.strip():
        raise ExtractionError(
            message="CSV content is empty",
            source="csv",
            user_message="The CSV file is empty. Please provide a file with process data.",
        )

    df = _parse_csv_content(content, delimiter=delimiter, encoding=encoding)

    if df.empty:
        raise ExtractionError(
            message="CSV has no data rows",
            source="csv",
            user_message="The CSV file has headers but no data rows.",
        )

    df = _map_columns(df)
    _validate_required_columns(df)
    df = _convert_dtypes(df)
    observations = _df_to_observations(df, unit)

    logger.info("Successfully loaded %d observations", len(observations))
    return observations
