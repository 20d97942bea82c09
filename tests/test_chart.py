"""Chart figure contents and renderer lifecycle."""

import pytest

from pvsim.chart import (SCENARIO_COLORS, ChartRenderer, ChartState, build_figure,
                         payback_label)
from pvsim.selector import ScenarioName
from pvsim.utils import Indicators

SERIES = [-22_000_000, 1_800_000, 1_900_000, 2_000_000, 2_100_000, 2_200_000, 2_300_000, 2_400_000]


class TestBuildFigure:
    def test_payback_marker_drawn_at_year(self):
        fig = build_figure(SERIES, Indicators(1.0, 12.0, 7), 'Flujo con Beneficios', ScenarioName.BENEFITS)
        assert len(fig.layout.shapes) == 1
        shape = fig.layout.shapes[0]
        assert shape.x0 == 7 and shape.x1 == 7
        texts = [a.text for a in fig.layout.annotations]
        assert payback_label('Flujo con Beneficios') in texts
        assert 'Flujo con Beneficios' in texts[0]

    def test_no_marker_when_payback_is_none(self):
        fig = build_figure(SERIES, Indicators(-5.0, None, None), 'Flujo sin Beneficios', ScenarioName.BASE)
        assert len(fig.layout.shapes) == 0
        assert len(fig.layout.annotations) == 0

    def test_single_series_with_year_labels(self):
        fig = build_figure(SERIES, Indicators(1.0), 'x')
        assert len(fig.data) == 1
        assert list(fig.data[0].y) == SERIES
        assert list(fig.layout.xaxis.ticktext)[:2] == ['Año 0', 'Año 1']
        assert fig.layout.yaxis.title.text == 'COP'

    def test_each_scenario_keeps_its_colour(self):
        colours = {}
        for name in ScenarioName:
            fig = build_figure(SERIES, Indicators(1.0), name.value, name)
            colours[name] = fig.data[0].line.color
            again = build_figure(SERIES, Indicators(1.0), name.value, name)
            assert again.data[0].line.color == colours[name]
        assert len(set(colours.values())) == 4
        assert set(SCENARIO_COLORS) == set(ScenarioName)


class TestChartRenderer:
    def test_render_without_surface_is_noop(self):
        renderer = ChartRenderer()
        assert renderer.render(SERIES, Indicators(1.0, None, 7), 'x') is None
        assert renderer.state is ChartState.UNINITIALIZED

    def test_lifecycle(self, surface):
        renderer = ChartRenderer(surface)
        assert renderer.state is ChartState.UNINITIALIZED
        first = renderer.render(SERIES, Indicators(1.0, None, 7), 'a')
        assert renderer.state is ChartState.RENDERED
        assert renderer.is_current
        second = renderer.render(SERIES, Indicators(1.0, None, None), 'b')
        assert first.state is ChartState.DISPOSED
        assert first.figure is None
        assert second.state is ChartState.RENDERED
        assert surface.cleared == 1
        assert len(surface.figures) == 2
        renderer.dispose(second)
        assert renderer.state is ChartState.DISPOSED
        assert surface.cleared == 2

    def test_dispose_twice_is_harmless(self, surface):
        renderer = ChartRenderer(surface)
        handle = renderer.render(SERIES, Indicators(1.0), 'a')
        renderer.dispose(handle)
        renderer.dispose(handle)
        renderer.dispose(None)
        assert surface.cleared == 1

    def test_remount_does_not_clear_stale_surface(self, surface):
        from conftest import FakeSurface
        renderer = ChartRenderer(surface)
        renderer.render(SERIES, Indicators(1.0), 'a')
        fresh = FakeSurface()
        renderer.mount(fresh)
        assert not renderer.is_current
        renderer.render(SERIES, Indicators(1.0), 'b')
        assert surface.cleared == 0
        assert len(fresh.figures) == 1

    def test_snapshot_requires_live_chart(self, surface):
        renderer = ChartRenderer(surface)
        with pytest.raises(ValueError):
            renderer.snapshot()
