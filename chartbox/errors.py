from __future__ import annotations


class ChartError(Exception):
    """Base class for every failure raised while building or rendering a chart."""


class ChartConfigError(ChartError, ValueError):
    pass


class RendererError(ChartError, RuntimeError):
    pass


class FontLoadError(ChartError, RuntimeError):
    pass


class OutputWriteError(ChartError, OSError):
    pass
