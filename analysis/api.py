"""
analysis/api.py
===============
Optional FastAPI server that exposes the run analyser as a REST endpoint.

Start the server::

    python -m analysis.api          # → http://localhost:8000/analyse

The ``/analyse`` endpoint accepts ``{"decisions": [...]}`` where each
decision carries ``top``/``up``, ``bottom``/``down`` and an optional
``choice``, and returns ``{verdict, tagline, livesLost, potentialSaved,
agency, compassion, summary}``.

.. note::

   This server is **not** required to run the Pygame simulation.
   It exists for external integrations and testing.
"""

from typing import List, Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel, Field

from analysis.analyser import analyse

# ── Pydantic request / response schemas ─────────────────────────────────────


class DecisionModel(BaseModel):
    """One round's victim counts and the operator's choice."""
    top: Optional[int] = Field(default=None, ge=0)
    up: Optional[int] = Field(default=None, ge=0)
    bottom: Optional[int] = Field(default=None, ge=0)
    down: Optional[int] = Field(default=None, ge=0)
    choice: Optional[str] = None


class RunRequest(BaseModel):
    """Decision log submitted to ``/analyse``."""
    decisions: List[DecisionModel]


class VerdictResponse(BaseModel):
    verdict: str
    tagline: str
    livesLost: int
    potentialSaved: int
    agency: float
    compassion: float
    summary: str


# ── FastAPI application ──────────────────────────────────────────────────────

app = FastAPI(
    title="Trolley Run Analyser API",
    description="Reduces a decision log to an ethical-archetype verdict.",
    version="1.0",
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/analyse", response_model=VerdictResponse)
def analyse_run(run: RunRequest):
    """Run the analyser on the submitted decision log."""
    decisions = [d.model_dump(exclude_none=True) for d in run.decisions]
    return analyse(decisions).as_dict()


# ── Standalone entry point ───────────────────────────────────────────────────

if __name__ == "__main__":
    from config import API_HOST, API_PORT

    print(f"Starting analyser server on http://{API_HOST}:{API_PORT} …")
    uvicorn.run(app, host=API_HOST, port=API_PORT)
