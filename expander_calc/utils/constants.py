"""Physical constants and conversion factors used throughout ExpanderCalc.

All values in SI units unless otherwise noted.
"""

# Thermodynamic
T_CELSIUS_OFFSET = 273.15  # K

# Time
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0

# Conversion factors
BAR_TO_PA = 1.0e5
PA_TO_BAR = 1.0e-5
J_TO_KJ = 1.0e-3
W_TO_KW = 1.0e-3
