"""
Core marking logic - UI-agnostic.

``core.marking`` holds the mark model, the coordinate transform and the
selection state machine; ``core.report`` turns a mark collection into
the exported count report.
"""
