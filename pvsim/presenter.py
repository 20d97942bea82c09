"""Presentation boundary between the Streamlit page and the scenario engine.

Holds the current bundle, the selection flags, the last good view and the
chart renderer. Every engine or service error is turned into a `Message` here;
nothing propagates to the page.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .chart import ChartRenderer
from .errors import (CalculationServiceError, MissingScenarioError, NoDataError,
                     SeriesLengthMismatchError)
from .export import export_csv, export_pdf, format_currency
from .selector import SCENARIO_LABELS, select
from .service import calculate as default_calculate
from .table import build_table
from .utils import ScenarioBundle, ScenarioView, Selection, SimulationInputs

logger = logging.getLogger(__name__)

MSG_INCOMPLETE = 'Resultados incompletos: el servicio no devolvió todos los escenarios ({}).'
MSG_MISMATCH = ('Advertencia de integridad de datos: la serie del escenario no cubre todos los años '
                'de la tabla ({}). Se mantiene la vista anterior.')
MSG_NO_DATA = 'No hay datos para exportar. Calcule un escenario primero.'
MSG_SERVICE = 'No fue posible calcular el flujo: {}'


@dataclass(frozen=True)
class Message:
    level: str  # 'error' | 'warning' | 'info'
    text: str


def derive_view(bundle: ScenarioBundle, selection: Selection) -> ScenarioView:
    name, series, indicators = select(bundle, selection.with_benefits, selection.with_leasing)
    rows = build_table(bundle.base_rows, series)
    return ScenarioView(scenario=name.value, label=SCENARIO_LABELS[name], series=tuple(series),
                        indicators=indicators, rows=tuple(rows))


class ScenarioPresenter:
    def __init__(self, renderer: Optional[ChartRenderer] = None, formatter=format_currency):
        self.renderer = renderer or ChartRenderer()
        self.formatter = formatter
        self.bundle: Optional[ScenarioBundle] = None
        self.selection = Selection()
        self.view: Optional[ScenarioView] = None
        self._lock = threading.Lock()

    def submit(self, inputs: SimulationInputs,
               calculate: Callable[[SimulationInputs], ScenarioBundle] = default_calculate) -> Optional[Message]:
        try:
            bundle = calculate(inputs)
        except CalculationServiceError as exc:
            # previous bundle and selection stay as they were
            logger.warning('calculation failed: %s', exc)
            return Message('error', MSG_SERVICE.format(exc))
        return self.receive(bundle)

    def receive(self, bundle: ScenarioBundle) -> Optional[Message]:
        """Swap in a new bundle on the base scenario, or keep the old state whole."""
        with self._lock:
            try:
                view = derive_view(bundle, Selection())
            except SeriesLengthMismatchError as exc:
                # bundle rejected: old bundle, selection and view stay together
                return self._mismatch(exc)
            except MissingScenarioError:
                view = None
            self.bundle = bundle
            self.selection = Selection()
            if view is None:
                return self._refresh()
            self.view = view
            self._draw(view)
            return None

    def update_selection(self, with_benefits: bool, with_leasing: bool) -> Optional[Message]:
        with self._lock:
            selection = Selection(bool(with_benefits), bool(with_leasing))
            if selection == self.selection and self.view is not None:
                if not self.renderer.is_current:
                    self._draw(self.view)
                return None
            previous = self.selection
            self.selection = selection
            message = self._refresh()
            if message is not None and message.level == 'warning':
                # the retained view still belongs to the previous flags
                self.selection = previous
            return message

    def _refresh(self) -> Optional[Message]:
        if self.bundle is None:
            return None
        try:
            view = derive_view(self.bundle, self.selection)
        except MissingScenarioError as exc:
            logger.error('bundle incomplete: %s', exc)
            self.view = None
            self.renderer.dispose(self.renderer.handle)
            return Message('error', MSG_INCOMPLETE.format(', '.join(exc.missing)))
        except SeriesLengthMismatchError as exc:
            return self._mismatch(exc)
        self.view = view
        self._draw(view)
        return None

    def _mismatch(self, exc: SeriesLengthMismatchError) -> Message:
        logger.warning('series length mismatch: %s', exc)
        if self.view is not None and not self.renderer.is_current:
            self._draw(self.view)
        return Message('warning', MSG_MISMATCH.format(exc))

    def _draw(self, view: ScenarioView):
        self.renderer.render(view.series, view.indicators, view.label, view.scenario)

    def _rows(self):
        if self.view is None or not self.view.rows:
            raise NoDataError('no derived rows')
        return self.view.rows

    def export_csv(self) -> Tuple[Optional[str], Optional[Message]]:
        try:
            return export_csv(self._rows(), self.formatter), None
        except NoDataError:
            return None, Message('warning', MSG_NO_DATA)

    def export_pdf(self) -> Tuple[Optional[bytes], Optional[Message]]:
        try:
            rows = self._rows()
        except NoDataError:
            return None, Message('warning', MSG_NO_DATA)
        snapshot = None
        try:
            snapshot = self.renderer.snapshot()
        except Exception as exc:
            logger.warning('chart snapshot unavailable, exporting PDF without it: %s', exc)
        return export_pdf(rows, snapshot, self.formatter, scenario_label=self.view.label), None
