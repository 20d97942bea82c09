"""Scenario selection from the benefits/leasing flags."""

import itertools

import pytest

from pvsim.errors import MissingScenarioError
from pvsim.selector import SCENARIO_LABELS, SCENARIO_TABLE, ScenarioName, select

from conftest import SERIES, make_bundle


class TestSelect:
    def test_all_four_combinations_map_to_distinct_scenarios(self, bundle):
        names = set()
        for wb, wl in itertools.product([False, True], repeat=2):
            name, _, _ = select(bundle, wb, wl)
            assert name in set(ScenarioName)
            names.add(name)
        assert len(names) == 4

    @pytest.mark.parametrize('wb, wl, expected', [
        (False, False, 'base'),
        (True, False, 'benefits'),
        (False, True, 'leasing'),
        (True, True, 'leasingBenefits'),
    ])
    def test_mapping(self, bundle, wb, wl, expected):
        name, series, indicators = select(bundle, wb, wl)
        assert name.value == expected
        assert list(series) == SERIES[expected]
        assert indicators is bundle.scenarios[expected].indicators

    def test_table_is_exhaustive(self):
        assert set(SCENARIO_TABLE) == set(itertools.product([False, True], repeat=2))
        assert set(SCENARIO_TABLE.values()) == set(ScenarioName)
        assert set(SCENARIO_LABELS) == set(ScenarioName)

    def test_missing_scenario_raises_even_when_not_selected(self):
        bundle = make_bundle(omit=('leasingBenefits',))
        with pytest.raises(MissingScenarioError) as exc:
            select(bundle, False, False)
        assert exc.value.missing == ('leasingBenefits',)

    def test_truthy_flags_are_normalised(self, bundle):
        name, _, _ = select(bundle, 1, 0)
        assert name is ScenarioName.BENEFITS
