from typing import Dict, Optional

# Voltage drop limits (% of system voltage)
MAX_VOLTAGE_DROP_PERCENT = 3.0
DANGEROUS_VOLTAGE_DROP_PERCENT = 10.0

# Share of derated ampacity above which a result gets a margin warning
UTILIZATION_WARNING_PERCENT = 80.0

# Number of larger compliant sizes listed next to the recommendation
ALTERNATIVE_SIZES = 3

CACHE_SIZE = 256

# NEC 250.122 needs an OCPD rating; estimated as 125% of the load current
NEC_OCPD_FACTOR = 1.25

DEFAULT_CONFIG: Dict[str, float] = {
    "max_voltage_drop_percent": MAX_VOLTAGE_DROP_PERCENT,
    "dangerous_voltage_drop_percent": DANGEROUS_VOLTAGE_DROP_PERCENT,
    "utilization_warning_percent": UTILIZATION_WARNING_PERCENT,
    "alternative_sizes": ALTERNATIVE_SIZES,
    "cache_size": CACHE_SIZE,
}


def load_config(overrides: Optional[Dict[str, float]] = None) -> Dict[str, float]:
    merged = dict(DEFAULT_CONFIG)
    if overrides:
        unknown = set(overrides) - set(DEFAULT_CONFIG)
        if unknown:
            raise KeyError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        merged.update(overrides)
    return merged
