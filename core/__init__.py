"""Core (UI-agnostic) dashboard logic.

This package contains:
- the cost summary data model and the source protocol
- fixed display configuration (palette, top-N, thresholds)
- derived-value computations (pandas)
- navigation state and its step function
- the one-shot initial load
"""

