"""Exceptions raised by the scenario engine and the calculator client."""


class PVSimError(Exception):
    pass


class ScenarioDataError(PVSimError, ValueError):
    """The bundle returned by the calculator cannot be presented."""


class MissingScenarioError(ScenarioDataError):
    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__('missing scenarios: ' + ', '.join(self.missing))


class SeriesLengthMismatchError(ScenarioDataError):
    def __init__(self, series_len: int, rows_len: int):
        self.series_len = series_len
        self.rows_len = rows_len
        super().__init__(f'series has {series_len} values but the table has {rows_len} rows')


class NoDataError(PVSimError, ValueError):
    """Export attempted with no derived rows."""


class CalculationServiceError(PVSimError):
    """Network, HTTP or timeout failure talking to the calculator."""


class MalformedResponseError(CalculationServiceError):
    pass
