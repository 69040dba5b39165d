"""Explicit workflow domain concepts.

This package introduces first-class types for:
- the pull-request run state machine
- the tagged outcome every workflow returns

Control flow stays deterministic: each run walks the transition table once
and ends in exactly one outcome.
"""

__all__: list[str] = []
