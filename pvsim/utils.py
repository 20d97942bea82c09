
from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

@dataclass
class SimulationInputs:
    generacion_anual_kwh: float = 7500
    porcentaje_autoconsumo: float = 0.2
    consumo_anual_usuario: float = 6000
    precio_compra_kwh: float = 950  # COP/kWh
    crecimiento_energia: float = 0.08
    precio_bolsa: float = 400  # COP/kWh
    crecimiento_bolsa: float = 0.08
    componente_comercializacion: float = 60
    capex: float = 22_000_000
    opex_anual: float = 1_000_000
    horizonte_anios: int = 25
    tasa_descuento: float = 0.10
    anios_deduccion_renta: int = 3  # 1..15

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class Indicators:
    net_present_value: float
    internal_rate_of_return: Optional[float] = None  # percent, None = never reached
    payback_year: Optional[float] = None  # None = does not recover

@dataclass(frozen=True)
class Scenario:
    series: Tuple[float, ...]
    indicators: Indicators

@dataclass(frozen=True)
class ScenarioBundle:
    """Result of one calculation. Replaced wholesale, never edited."""
    scenarios: Mapping[str, Scenario]
    base_rows: Tuple[Mapping[str, Any], ...]
    summary: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'scenarios', MappingProxyType(dict(self.scenarios)))
        rows = tuple(MappingProxyType(dict(r)) for r in self.base_rows)
        object.__setattr__(self, 'base_rows', rows)
        object.__setattr__(self, 'summary', MappingProxyType(dict(self.summary)))

    @property
    def horizon(self) -> int:
        return len(self.base_rows) - 1

@dataclass(frozen=True)
class Selection:
    with_benefits: bool = False
    with_leasing: bool = False

@dataclass(frozen=True)
class ScenarioView:
    scenario: str
    label: str
    series: Tuple[float, ...]
    indicators: Indicators
    rows: Tuple[Dict[str, Any], ...]
