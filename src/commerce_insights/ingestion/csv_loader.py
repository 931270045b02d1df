"""CSV exports -> raw dataset bundle for the insights engine."""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

# bundle key -> expected file name inside the data directory
DATASET_FILES: dict[str, str] = {
    "monthlySales": "monthly_sales.csv",
    "productCategories": "product_categories.csv",
    "trafficSources": "traffic_sources.csv",
    "customerDemographics": "customer_demographics.csv",
    "marketingCampaigns": "marketing_campaigns.csv",
}


def dataframe_to_records(df: pd.DataFrame) -> list[dict]:
    """Rows as dicts with column names stripped of surrounding whitespace."""
    if df.empty:
        return []
    df = df.rename(columns=lambda c: str(c).strip())
    return df.to_dict(orient="records")


def load_csv(path: Path) -> list[dict]:
    """Read one CSV file as raw string rows, preserving row order.

    Every column is read as text so parsing stays with the record normalizer;
    empty cells become empty strings.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return dataframe_to_records(df)


def load_bundle(directory: Path | str) -> dict[str, list[dict]]:
    """Load every dashboard dataset found in *directory*.

    Missing files are skipped; the engine treats absent datasets as empty.
    """
    directory = Path(directory)
    bundle: dict[str, list[dict]] = {}
    for key, filename in DATASET_FILES.items():
        path = directory / filename
        if not path.exists():
            logger.info("Dataset %s not found at %s, skipping", key, path)
            continue
        bundle[key] = load_csv(path)
        logger.info("Loaded %d rows for %s from %s", len(bundle[key]), key, path.name)
    return bundle
