"""Expander cycle analysis for ExpanderCalc.

Provides the expander component model, state-point resolution and the
evaluator that turns a cycle definition into state points, flows and
shaft power.
"""
