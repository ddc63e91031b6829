"""pipegen — CI pipeline and infrastructure generation from project analysis."""

__version__ = "0.1.0"
