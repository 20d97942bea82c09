
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence
import plotly.graph_objects as go
from .utils import Indicators
from .selector import ScenarioName
from .config import CURRENCY

logger = logging.getLogger(__name__)

CHART_TITLE = 'Flujo de Caja Anual del Proyecto'

# one stable colour per scenario: (line, fill, payback marker)
SCENARIO_COLORS = {
    ScenarioName.BASE: ('#007bff', 'rgba(0, 123, 255, 0.2)', 'red'),
    ScenarioName.BENEFITS: ('#28a745', 'rgba(40, 167, 69, 0.2)', 'lime'),
    ScenarioName.LEASING: ('#fd7e14', 'rgba(253, 126, 20, 0.2)', 'purple'),
    ScenarioName.LEASING_BENEFITS: ('#6f42c1', 'rgba(111, 66, 193, 0.2)', 'darkorange'),
}
DEFAULT_COLORS = SCENARIO_COLORS[ScenarioName.BASE]


class ChartState(str, Enum):
    UNINITIALIZED = 'uninitialized'
    RENDERED = 'rendered'
    DISPOSED = 'disposed'


@dataclass
class ChartHandle:
    figure: Optional[go.Figure]
    surface: Any
    label: str
    scenario: Optional[ScenarioName] = None
    state: ChartState = ChartState.RENDERED


def payback_label(scenario_label: str) -> str:
    return f'Payback {scenario_label}'


def build_figure(series: Sequence[float], indicators: Indicators, scenario_label: str,
                 scenario: Optional[ScenarioName] = None) -> go.Figure:
    line, fill, marker = SCENARIO_COLORS.get(scenario, DEFAULT_COLORS)
    years = list(range(len(series)))
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=years, y=list(series), mode='lines+markers', name=scenario_label,
        line=dict(color=line), fill='tozeroy', fillcolor=fill, marker=dict(size=6),
    ))
    fig.update_layout(
        title=CHART_TITLE,
        legend=dict(orientation='h', yanchor='bottom', y=1.02),
        margin=dict(l=10, r=10, t=60, b=10),
    )
    fig.update_xaxes(title_text='Año', tickmode='array', tickvals=years, ticktext=[f'Año {y}' for y in years])
    fig.update_yaxes(title_text=CURRENCY)
    # no marker when the project never pays back
    if indicators.payback_year is not None:
        fig.add_vline(
            x=indicators.payback_year, line_color=marker, line_width=2,
            annotation_text=payback_label(scenario_label), annotation_position='top left',
        )
    return fig


class ChartRenderer:
    """Owns the single drawing surface; at most one live chart at a time."""

    def __init__(self, surface: Any = None):
        self._surface = surface
        self._handle: Optional[ChartHandle] = None

    @property
    def state(self) -> ChartState:
        if self._handle is None:
            return ChartState.UNINITIALIZED
        return self._handle.state

    @property
    def handle(self) -> Optional[ChartHandle]:
        return self._handle

    @property
    def is_current(self) -> bool:
        """True when a live chart is drawn on the mounted surface."""
        h = self._handle
        return h is not None and h.state is ChartState.RENDERED and h.surface is self._surface

    def mount(self, surface: Any):
        """Attach a new drawing surface (e.g. a fresh st.empty() placeholder on rerun)."""
        self._surface = surface

    def render(self, series: Sequence[float], indicators: Indicators, scenario_label: str,
               scenario: Optional[ScenarioName] = None) -> Optional[ChartHandle]:
        if self._surface is None:
            logger.debug('chart surface not mounted, render deferred')
            return None
        if self._handle is not None:
            self.dispose(self._handle)
        fig = build_figure(series, indicators, scenario_label, scenario)
        self._surface.plotly_chart(fig, use_container_width=True)
        self._handle = ChartHandle(figure=fig, surface=self._surface, label=scenario_label, scenario=scenario)
        logger.debug('chart rendered for %s', scenario_label)
        return self._handle

    def dispose(self, handle: Optional[ChartHandle]):
        if handle is None or handle.state is ChartState.DISPOSED:
            return
        # a surface left behind by a previous rerun is already gone
        if handle.surface is not None and handle.surface is self._surface:
            handle.surface.empty()
        handle.state = ChartState.DISPOSED
        handle.figure = None

    def snapshot(self, handle: Optional[ChartHandle] = None, width: int = 1200, height: int = 600) -> bytes:
        """PNG bytes of the live chart (requires kaleido)."""
        handle = handle or self._handle
        if handle is None or handle.state is not ChartState.RENDERED:
            raise ValueError('no live chart to snapshot')
        return handle.figure.to_image(format='png', width=width, height=height, scale=2)
