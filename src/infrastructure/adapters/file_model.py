"""
File-backed model for headless runs.

Implements the ModelProvider protocol over a data directory:

    <data_dir>/model.yaml     model description, sectors, indicators
    <data_dir>/result.yaml    result matrix (or result.json / result.csv)

Expected model.yaml format:
```yaml
id: demo
name: Demo model
multi_regional: true
sectors:
  - {code: A, id: a/de, index: 0, name: Agriculture, location: DE}
  - {code: A, id: a/fr, index: 1, name: Agriculture, location: FR}
indicators:
  - {code: GHG, index: 0, name: Greenhouse gases, unit: kg CO2e}
```

result.csv holds one row per indicator code (first column) and one column
per sector; an optional ``_total`` column gives the row totals, otherwise
the row sums are used.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

import pandas as pd
import yaml

from ...domain.exceptions import ModelDataError, ResultShapeError
from ...models.result_matrix import ResultMatrix
from ...models.sector import Indicator, Sector
from ...utils.logging_setup import get_logger

logger = get_logger(__name__)

TOTAL_COLUMN = "_total"


class FileModel:
    """
    Model read from YAML/JSON/CSV files.

    Files are read once, on first access.
    """

    def __init__(self, data_dir: str | Path):
        """
        Args:
            data_dir: Directory holding model.yaml and a result file.
        """
        self.data_dir = Path(data_dir)
        self._raw: Optional[Dict[str, Any]] = None
        self._sectors: Optional[List[Sector]] = None
        self._indicators: Optional[List[Indicator]] = None

    @property
    def model_id(self) -> Optional[str]:
        return self._load_model().get("id")

    async def is_multi_regional(self) -> bool:
        return bool(self._load_model().get("multi_regional", False))

    async def sectors(self) -> List[Sector]:
        if self._sectors is None:
            self._sectors = self._parse_items(Sector, "sectors")
        return list(self._sectors)

    async def indicators(self) -> List[Indicator]:
        if self._indicators is None:
            self._indicators = self._parse_items(Indicator, "indicators")
        return list(self._indicators)

    async def result(self) -> ResultMatrix:
        """
        Load the result matrix.

        Raises:
            ModelDataError: If no result file exists or it is malformed.
        """
        for name in ("result.yaml", "result.yml", "result.json"):
            path = self.data_dir / name
            if path.exists():
                raw = self._read_mapping(path)
                try:
                    result = ResultMatrix.from_dict(raw)
                except (TypeError, ValueError) as e:
                    raise ModelDataError(f"Malformed result in {path}: {e}") from e
                return self._checked(result, path)

        csv_path = self.data_dir / "result.csv"
        if csv_path.exists():
            return self._checked(self._read_csv(csv_path), csv_path)

        raise ModelDataError(f"No result file found in {self.data_dir}")

    def _load_model(self) -> Dict[str, Any]:
        if self._raw is None:
            path = self.data_dir / "model.yaml"
            self._raw = self._read_mapping(path)
            logger.info(f"Loaded model description from {path}")
        return self._raw

    def _parse_items(self, cls: type, key: str) -> list:
        items = self._load_model().get(key) or []
        try:
            parsed = [cls.from_dict(item) for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise ModelDataError(f"Invalid {key} entry in {self.data_dir / 'model.yaml'}: {e}")
        logger.debug(f"Parsed {len(parsed)} {key}")
        return parsed

    def _read_mapping(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ModelDataError(f"Model file not found: {path}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ModelDataError(f"Invalid data in {path}: {e}")
        if not isinstance(data, dict):
            raise ModelDataError(f"Expected a mapping in {path}")
        return data

    def _read_csv(self, path: Path) -> ResultMatrix:
        try:
            frame = pd.read_csv(path, index_col=0)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise ModelDataError(f"Invalid CSV in {path}: {e}")

        try:
            frame = frame.astype(float)
        except (TypeError, ValueError) as e:
            raise ModelDataError(f"Non-numeric value in {path}: {e}") from e

        if TOTAL_COLUMN in frame.columns:
            totals = frame[TOTAL_COLUMN]
            frame = frame.drop(columns=[TOTAL_COLUMN])
        else:
            totals = frame.sum(axis=1, skipna=True)

        data = [
            [None if pd.isna(v) else float(v) for v in row]
            for row in frame.itertuples(index=False)
        ]
        return ResultMatrix(
            data=data,
            totals=[None if pd.isna(t) else float(t) for t in totals],
            sectors=[str(c) for c in frame.columns],
            indicators=[str(i) for i in frame.index],
        )

    def _checked(self, result: ResultMatrix, path: Path) -> ResultMatrix:
        try:
            result.validate()
        except ResultShapeError as e:
            raise ModelDataError(f"Malformed result in {path}: {e}") from e
        logger.info(f"Loaded result {result.shape[0]}x{result.shape[1]} from {path}")
        return result
