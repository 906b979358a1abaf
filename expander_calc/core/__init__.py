"""Core modules for ExpanderCalc.

This package contains:
- fluids: CoolProp property oracle and the fluid catalogue
- phase: Phase enumeration and phase/quality labels
- loader: One-time property library initialisation
- context: Application context and the evaluation boundary
- config: Case persistence (JSON) and form defaults
"""
