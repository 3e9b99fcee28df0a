"""Unit tests for the inflation measure interface and reference measures."""

import pytest
import numpy as np
import logging

from cpi_aggregation.data import CountryStructure, VarCPIBase
from cpi_aggregation.inflation import (
    InflationFunction,
    InflationTotalCPI,
    InflationCombination,
    ResultType,
    derive_result
)
from cpi_aggregation.utils import SpliceDefinitionError, capitalize, getdates, varinteran


class TestResultType:
    """Test result type parsing and derivation."""

    def test_parse(self):
        assert ResultType.parse("YOY") is ResultType.YOY
        assert ResultType.parse(ResultType.MOM) is ResultType.MOM

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown result type"):
            ResultType.parse("quarterly")

    def test_derive_result(self):
        mom = np.full(13, 1.0)
        assert derive_result(mom, ResultType.MOM) is mom
        np.testing.assert_allclose(derive_result(mom, ResultType.INDEX), capitalize(mom))
        assert derive_result(mom, ResultType.YOY).shape == (2,)


class TestInflationFunction:
    """Test dispatch of the common interface."""

    def test_abstract_evaluation(self, column_bases):
        with pytest.raises(NotImplementedError):
            InflationFunction()(column_bases[0])

    def test_unsupported_data(self):
        with pytest.raises(TypeError, match="Cannot evaluate"):
            InflationTotalCPI()(np.zeros((3, 3)))

    def test_full_base_matches_country_result(self, full_base):
        total = InflationTotalCPI()
        np.testing.assert_allclose(
            total(full_base), total(CountryStructure(full_base), ResultType.MOM)
        )

    def test_date_on_single_base(self, column_bases):
        with pytest.raises(ValueError, match="CountryStructure"):
            InflationTotalCPI()(column_bases[0], date="2000-05-01")

    def test_default_names(self):
        assert InflationFunction().measure_name() == "InflationFunction"
        assert repr(InflationTotalCPI()) == "InflationTotalCPI('Headline CPI')"


class TestInflationTotalCPI:
    """Test the headline CPI measure."""

    def setup_method(self):
        self.v = np.array([[1.0, 3.0], [2.0, 0.0], [0.0, -1.0]])
        self.w = np.array([75.0, 25.0])
        self.base = VarCPIBase(self.v, self.w, getdates("2001-01-01", 3))

    def test_single_base(self):
        idx = capitalize(self.v, 100) @ (self.w / self.w.sum())
        expected = np.concatenate([[100 * (idx[0] / 100 - 1)], 100 * (idx[1:] / idx[:-1] - 1)])
        np.testing.assert_allclose(InflationTotalCPI()(self.base), expected)

    def test_first_period_is_weighted_mean(self):
        result = InflationTotalCPI()(self.base)
        assert result[0] == pytest.approx(0.75 * 1.0 + 0.25 * 3.0)

    def test_country_defaults_to_yoy(self, random_country):
        total = InflationTotalCPI()
        mom = total(random_country, ResultType.MOM)

        assert len(mom) == random_country.periods
        np.testing.assert_allclose(total(random_country), varinteran(capitalize(mom, 100)))
        assert len(total(random_country)) == random_country.periods - 11

    def test_date_ignored(self, random_country, caplog):
        total = InflationTotalCPI()
        with caplog.at_level(logging.DEBUG):
            dated = total(random_country, ResultType.MOM, "2010-06-01")
        np.testing.assert_allclose(dated, total(random_country, ResultType.MOM))


class TestInflationCombination:
    """Test weighted combinations of measures."""

    def test_weighted_sum(self, column_bases, column_measures):
        combination = InflationCombination(column_measures[0], column_measures[1], weights=[0.25, 0.75])
        base = column_bases[0]
        np.testing.assert_allclose(combination(base), 0.25 * base.v[:, 0] + 0.75 * base.v[:, 1])

    def test_country_combines_results(self, random_country):
        total = InflationTotalCPI()
        combination = InflationCombination([total, total], weights=[0.5, 0.5])
        np.testing.assert_allclose(combination(random_country), total(random_country))

    def test_weights_mismatch(self, column_measures):
        with pytest.raises(SpliceDefinitionError, match="must match"):
            InflationCombination(*column_measures, weights=[0.5, 0.5])

    def test_weights_not_summing_to_one(self, column_measures, caplog):
        with caplog.at_level(logging.WARNING):
            InflationCombination(column_measures[0], weights=[1.5])
        assert "not 1" in caplog.text

    def test_names(self, column_measures):
        combination = InflationCombination(column_measures[:2], weights=[0.5, 0.5])
        assert combination.measure_name() == "Weighted average of Column 0, Column 1"
        assert combination.measure_tag() == "COMBFN"

    def test_components(self, column_measures):
        combination = InflationCombination(column_measures[:2], weights=[0.4, 0.6])
        df = combination.components()

        assert df["tag"].tolist() == ["C0", "C1"]
        np.testing.assert_allclose(df["weights"], [0.4, 0.6])
