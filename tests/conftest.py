"""Pytest configuration and shared fixtures."""

import pytest

from cpi_aggregation.inflation import InflationFunction
from cpi_aggregation.tree import CPITree

from fixtures.sample_data_generator import (
    generate_group_table,
    generate_item_table,
    generate_index_table,
    generate_full_base,
    generate_column_bases,
    generate_random_country
)


class ColumnMeasure(InflationFunction):
    """Measure returning one column of the base unchanged."""

    def __init__(self, column: int):
        self.column = column
        self.name = f"Column {column}"
        self.tag = f"C{column}"

    def evaluate_base(self, base):
        return base.v[:, self.column]


@pytest.fixture
def group_table():
    return generate_group_table()


@pytest.fixture
def item_table():
    return generate_item_table()


@pytest.fixture
def index_table():
    return generate_index_table()


@pytest.fixture
def full_base():
    """Ten-item base over 36 months with one growing item."""
    return generate_full_base()


@pytest.fixture
def cpi_tree(full_base, group_table):
    return CPITree.from_groups(full_base, group_table)


@pytest.fixture
def column_bases():
    return generate_column_bases()


@pytest.fixture
def column_measures():
    """Measures picking the first, second and third column."""
    return [ColumnMeasure(0), ColumnMeasure(1), ColumnMeasure(2)]


@pytest.fixture
def random_country():
    return generate_random_country()
