"""Pytest configuration and fixtures."""

from typing import List

import pytest

from src.models.result_matrix import ResultMatrix
from src.models.sector import Indicator, Sector


class StaticModel:
    """In-memory ModelProvider."""

    def __init__(self, sectors: List[Sector], multi_regional: bool = False):
        self._sectors = list(sectors)
        self._multi_regional = multi_regional
        self.calls = 0

    async def is_multi_regional(self) -> bool:
        self.calls += 1
        return self._multi_regional

    async def sectors(self) -> List[Sector]:
        self.calls += 1
        return list(self._sectors)


class FailingModel:
    """ModelProvider whose calls fail."""

    async def is_multi_regional(self) -> bool:
        raise ConnectionError("model service unavailable")

    async def sectors(self) -> List[Sector]:
        raise ConnectionError("model service unavailable")


def make_sector(code: str, index: int, name: str = "", location: str = None) -> Sector:
    name = name or code
    suffix = f"/{location.lower()}" if location else ""
    return Sector(code=code, id=f"{code.lower()}{suffix}", index=index, name=name, location=location)


@pytest.fixture
def indicators() -> List[Indicator]:
    """Two indicators: GHG (row 0) and WATER (row 1)."""
    return [
        Indicator(code="GHG", index=0, name="Greenhouse gases", unit="kg CO2e"),
        Indicator(code="WATER", index=1, name="Water use", unit="m3"),
    ]


@pytest.fixture
def single_region_sectors() -> List[Sector]:
    return [
        make_sector("C24", 0, "Steel"),
        make_sector("C25", 1, "Steelworks"),
        make_sector("C13", 2, "Textiles"),
    ]


@pytest.fixture
def single_region_result() -> ResultMatrix:
    return ResultMatrix(
        data=[
            [10.0, 5.0, 5.0],
            [2.0, 6.0, 12.0],
        ],
        totals=[20.0, 20.0],
        sectors=["c24", "c25", "c13"],
        indicators=["GHG", "WATER"],
    )


@pytest.fixture
def two_region_sectors() -> List[Sector]:
    """Sectors A and B, each in DE and FR (interleaved by region)."""
    return [
        make_sector("A", 0, "Agriculture", "DE"),
        make_sector("B", 1, "Basic metals", "DE"),
        make_sector("A", 2, "Agriculture", "FR"),
        make_sector("B", 3, "Basic metals", "FR"),
    ]


@pytest.fixture
def two_region_result() -> ResultMatrix:
    return ResultMatrix(
        data=[
            [10.0, 1.0, 4.0, 3.0],
            [0.0, -2.0, 6.0, 8.0],
        ],
        totals=[18.0, 12.0],
        sectors=["a/de", "b/de", "a/fr", "b/fr"],
        indicators=["GHG", "WATER"],
    )


@pytest.fixture
def single_region_model(single_region_sectors) -> StaticModel:
    return StaticModel(single_region_sectors, multi_regional=False)


@pytest.fixture
def two_region_model(two_region_sectors) -> StaticModel:
    return StaticModel(two_region_sectors, multi_regional=True)


@pytest.fixture
def failing_model() -> FailingModel:
    return FailingModel()


@pytest.fixture
def model_factory():
    """Build a StaticModel from sectors."""
    def factory(sectors: List[Sector], multi_regional: bool = False) -> StaticModel:
        return StaticModel(sectors, multi_regional=multi_regional)
    return factory


@pytest.fixture
def sector_factory():
    """Build a Sector from (code, index, name, location)."""
    return make_sector
