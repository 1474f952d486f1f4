# src/circmark/analysis/__init__.py
from .connectivity import ConnectivityAnalyzer

__all__ = [
    "ConnectivityAnalyzer",
]
