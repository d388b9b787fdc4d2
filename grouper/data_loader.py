"""Data loader module for parsing the roster CSV."""

import io
import logging
import pandas as pd
from pathlib import Path
from typing import IO, List, Sequence, Union

from .config import TRAIT_NAMES
from .errors import SchemaError
from .models.individual import Individual

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, IO]


def load_individuals(
    source: CsvSource,
    trait_names: Sequence[str] = TRAIT_NAMES,
    delimiter: str = ",",
) -> List[Individual]:
    """
    Parse a roster table into Individual instances.

    Expected header: name,gender,discipline,seniority,client,team
    Extra columns are ignored; every cell is read as text with surrounding
    whitespace stripped. Empty cells are kept as empty strings so the trait
    catalogue can reject them.

    Args:
        source: Path, text stream or byte stream (e.g. sys.stdin.buffer)
        trait_names: Trait columns to read, in order
        delimiter: Field separator

    Returns:
        Individuals in row order

    Raises:
        FileNotFoundError: If a path source does not exist
        SchemaError: If the table is empty or a required column is missing
    """
    try:
        df = pd.read_csv(
            source,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise SchemaError(f"Roster is empty: {e}")
    except pd.errors.ParserError as e:
        raise SchemaError(f"Roster is not a valid delimited table: {e}")

    df.columns = [str(col).strip() for col in df.columns]
    logger.info(f"Loaded roster CSV with {len(df)} rows")

    required_cols = ["name"] + list(trait_names)
    for col in required_cols:
        if col not in df.columns:
            raise SchemaError(
                f"Missing required column: {col}",
                {"column": col, "columns": list(df.columns)},
            )

    individuals = []
    for _, row in df.iterrows():
        traits = {trait_name: row[trait_name].strip() for trait_name in trait_names}
        individual = Individual(name=row["name"].strip(), traits=traits)
        individuals.append(individual)

        logger.debug(f"Loaded individual {individual}")

    logger.info(f"Successfully loaded {len(individuals)} individuals")
    return individuals


def load_individuals_from_text(
    text: str,
    trait_names: Sequence[str] = TRAIT_NAMES,
    delimiter: str = ",",
) -> List[Individual]:
    """Parse a roster held in memory (e.g. an HTTP request body)."""
    return load_individuals(io.StringIO(text), trait_names, delimiter)
