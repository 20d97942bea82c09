import pytest

from pvsim.utils import Indicators, Scenario, ScenarioBundle

SERIES = {
    'base': [-22_000_000, 1_800_000, 1_900_000],
    'benefits': [-22_000_000, 4_800_000, 4_100_000],
    'leasing': [0, -300_000, -250_000],
    'leasingBenefits': [0, 900_000, 1_000_000],
}
PAYBACK = {'base': None, 'benefits': 7, 'leasing': None, 'leasingBenefits': 2}


class FakeSurface:
    """Stands in for a Streamlit placeholder."""

    def __init__(self):
        self.figures = []
        self.cleared = 0

    def plotly_chart(self, fig, **kwargs):
        self.figures.append(fig)

    def empty(self):
        self.cleared += 1


def make_rows(n=3):
    return [
        {'year': i, 'income': 2_500_000 + i * 10_000, 'opex': 1_000_000, 'netFlow': 0, 'cumulativeFlow': 999}
        for i in range(n)
    ]


def make_bundle(series=None, rows=None, omit=()):
    series = series or SERIES
    scenarios = {
        name: Scenario(series=tuple(values),
                       indicators=Indicators(net_present_value=sum(values), internal_rate_of_return=None,
                                             payback_year=PAYBACK.get(name)))
        for name, values in series.items() if name not in omit
    }
    return ScenarioBundle(scenarios=scenarios, base_rows=tuple(rows or make_rows(len(next(iter(series.values()))))),
                          summary={'ingreso_total_anual': 2_500_000})


@pytest.fixture
def bundle():
    return make_bundle()


@pytest.fixture
def surface():
    return FakeSurface()
