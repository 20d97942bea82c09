import logging
import numbers
from typing import Any, Dict, Optional
import requests
from .utils import SimulationInputs, ScenarioBundle, Scenario, Indicators
from .selector import ScenarioName
from .config import get_settings
from .errors import CalculationServiceError, MalformedResponseError

logger = logging.getLogger(__name__)


def _number(value, what):
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise MalformedResponseError(f'{what} is not a number: {value!r}')
    return value


def _optional_number(value, what):
    return None if value is None else _number(value, what)


def parse_indicators(raw: Any, name: str) -> Indicators:
    if not isinstance(raw, dict) or 'netPresentValue' not in raw:
        raise MalformedResponseError(f'scenario {name!r} has no netPresentValue')
    return Indicators(
        net_present_value=_number(raw['netPresentValue'], f'{name}.netPresentValue'),
        internal_rate_of_return=_optional_number(raw.get('internalRateOfReturn'), f'{name}.internalRateOfReturn'),
        payback_year=_optional_number(raw.get('paybackYear'), f'{name}.paybackYear'),
    )


def parse_bundle(payload: Any) -> ScenarioBundle:
    """
    Build a ScenarioBundle from the calculator's JSON response.
    Absent scenarios are skipped here; the selector reports them.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError('response is not a JSON object')
    rows = payload.get('baseRows')
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise MalformedResponseError('response has no baseRows table')
    raw_scenarios = payload.get('scenarios', {})
    if not isinstance(raw_scenarios, dict):
        raise MalformedResponseError('scenarios is not an object')

    scenarios: Dict[str, Scenario] = {}
    for name in ScenarioName:
        raw = raw_scenarios.get(name.value)
        if raw is None:
            continue
        series = raw.get('series') if isinstance(raw, dict) else None
        if not isinstance(series, list):
            raise MalformedResponseError(f'scenario {name.value!r} has no series')
        scenarios[name.value] = Scenario(
            series=tuple(_number(v, f'{name.value}.series') for v in series),
            indicators=parse_indicators(raw.get('indicators'), name.value),
        )
    summary = payload.get('summary') or {}
    return ScenarioBundle(scenarios=scenarios, base_rows=tuple(rows), summary=summary if isinstance(summary, dict) else {})


def calculate(inputs: SimulationInputs, url: Optional[str] = None, timeout: Optional[float] = None) -> ScenarioBundle:
    settings = get_settings()
    url = url or settings.service_url
    timeout = timeout or settings.timeout
    logger.info('Requesting calculation from %s', url)
    try:
        resp = requests.post(url, json=inputs.to_payload(), timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.error('Calculation request failed: %s', exc)
        raise CalculationServiceError(str(exc)) from exc
    try:
        data = resp.json()
    except ValueError as exc:
        raise MalformedResponseError('response is not valid JSON') from exc
    bundle = parse_bundle(data)
    logger.info('Received %d scenarios over %d years', len(bundle.scenarios), len(bundle.base_rows))
    return bundle
