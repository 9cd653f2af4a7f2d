"""
analysis — Run scoring
======================

Modules
-------
analyser
    :func:`analyse` decision log → verdict reducer.
api
    Optional FastAPI server exposing :func:`analyse` over HTTP.
"""

from .analyser import AnalysisResult, RunTotals, aggregate, analyse, pick_verdict

__all__ = [
    "AnalysisResult",
    "RunTotals",
    "aggregate",
    "analyse",
    "pick_verdict",
]
