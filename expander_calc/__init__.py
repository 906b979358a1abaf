"""ExpanderCalc — real-fluid expander cycle calculator.

Evaluates the expansion of a working fluid through an expander using
CoolProp for all thermodynamic properties.
"""

__app_name__ = "ExpanderCalc"
__version__ = "0.3.0"
