
from enum import Enum
from typing import Dict, Tuple
from .utils import ScenarioBundle, Indicators
from .errors import MissingScenarioError


class ScenarioName(str, Enum):
    BASE = 'base'
    BENEFITS = 'benefits'
    LEASING = 'leasing'
    LEASING_BENEFITS = 'leasingBenefits'


# (with_benefits, with_leasing) -> scenario
SCENARIO_TABLE: Dict[Tuple[bool, bool], ScenarioName] = {
    (False, False): ScenarioName.BASE,
    (True, False): ScenarioName.BENEFITS,
    (False, True): ScenarioName.LEASING,
    (True, True): ScenarioName.LEASING_BENEFITS,
}

SCENARIO_LABELS: Dict[ScenarioName, str] = {
    ScenarioName.BASE: 'Flujo sin Beneficios',
    ScenarioName.BENEFITS: 'Flujo con Beneficios',
    ScenarioName.LEASING: 'Flujo con Leasing',
    ScenarioName.LEASING_BENEFITS: 'Flujo con Leasing y Beneficios',
}


def missing_scenarios(bundle: ScenarioBundle):
    return [s.value for s in ScenarioName if s.value not in bundle.scenarios]


def select(bundle: ScenarioBundle, with_benefits: bool, with_leasing: bool) -> Tuple[ScenarioName, Tuple[float, ...], Indicators]:
    """Return (name, series, indicators) of the scenario picked by the two flags.

    All four scenarios must be present in the bundle, whichever one is picked.
    """
    missing = missing_scenarios(bundle)
    if missing:
        raise MissingScenarioError(missing)
    name = SCENARIO_TABLE[(bool(with_benefits), bool(with_leasing))]
    scenario = bundle.scenarios[name.value]
    return name, scenario.series, scenario.indicators
