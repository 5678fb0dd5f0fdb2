"""Reading registry tables from CSV or Excel files."""

from pathlib import Path

import pandas as pd

from ..exceptions import InvalidDataError

# Accepted file extensions, in lookup order
TABLE_SUFFIXES = [".csv", ".xlsx", ".xls"]


def find_table(directory: Path, name: str) -> Path | None:
    """Find ``name.csv`` / ``name.xlsx`` / ``name.xls`` in a directory."""
    for suffix in TABLE_SUFFIXES:
        path = directory / f"{name}{suffix}"
        if path.exists():
            return path
    return None


def read_table(path: Path, required_columns: list[str]) -> pd.DataFrame:
    """Read a registry table with every cell as a stripped string.

    Args:
        path: CSV or Excel file
        required_columns: Columns that must be present

    Returns:
        DataFrame with string cells (empty string for blanks)

    Raises:
        InvalidDataError: If the file cannot be read or columns are missing
    """
    try:
        if path.suffix.lower() == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
        else:
            df = pd.read_excel(path, dtype=str, keep_default_na=False)
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise InvalidDataError(f"cannot read file: {e}", table=path.name) from e

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise InvalidDataError(
            f"missing columns: {', '.join(missing)}", table=path.name
        )

    for column in df.columns:
        df[column] = df[column].astype(str).str.strip()
    return df


def to_int(value: str, column: str, table: str, row: int) -> int:
    """Convert a cell to int, accepting Excel-style '90.0'.

    Raises:
        InvalidDataError: If the cell is not a whole number
    """
    try:
        number = float(value)
    except ValueError:
        raise InvalidDataError(
            f"column '{column}' must be a number, got '{value}'", table=table, row=row
        ) from None
    if not number.is_integer():
        raise InvalidDataError(
            f"column '{column}' must be a whole number, got '{value}'",
            table=table,
            row=row,
        )
    return int(number)


def require_value(value: str, column: str, table: str, row: int) -> str:
    """Ensure a cell is not blank.

    Raises:
        InvalidDataError: If the cell is empty
    """
    if not value:
        raise InvalidDataError(f"column '{column}' is empty", table=table, row=row)
    return value
