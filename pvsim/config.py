
import os
from dataclasses import dataclass

from .utils import SimulationInputs

DEFAULT_INPUTS = SimulationInputs()
DEFAULT_SERVICE_URL = 'https://cash-48v3.onrender.com/calcular'
DEFAULT_TIMEOUT = 30.0

CURRENCY = 'COP'
REPORT_TITLE = 'Simulador Financiero FV'
ATTRIBUTION = 'Simulador Solar Fotovoltaico - resultados generados por el servicio de cálculo financiero'

# anios_deduccion_renta bounds accepted by the calculator
DEDUCTION_YEARS_MIN = 1
DEDUCTION_YEARS_MAX = 15

@dataclass
class Settings:
    service_url: str = DEFAULT_SERVICE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = 'INFO'

def get_settings() -> Settings:
    """Read settings from PVSIM_* environment variables."""
    try:
        timeout = float(os.environ.get('PVSIM_TIMEOUT', DEFAULT_TIMEOUT))
    except ValueError:
        timeout = DEFAULT_TIMEOUT
    return Settings(
        service_url=os.environ.get('PVSIM_SERVICE_URL', DEFAULT_SERVICE_URL),
        timeout=timeout,
        log_level=os.environ.get('PVSIM_LOG_LEVEL', 'INFO').upper(),
    )
