"""Synthetic exercise-physiology heart-rate study: generator and batch analyzer.

Produces:
- participants: per-participant resting / submaximal heart rate
- sessions: one per-second heart-rate CSV per participant and session (P<p>_S<s>.csv)

Analyzes:
- long table (participant, session, elapsed_seconds, heart_rate), validated per session
- fixed-width stage means over the exercise window, first vs last stage comparison
"""

__all__ = ["generate_dataset", "analyze_dataset"]
from .pipeline import generate_dataset
from .analysis import analyze_dataset
