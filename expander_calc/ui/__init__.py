"""Desktop GUI for ExpanderCalc (requires the ``ui`` extra)."""
