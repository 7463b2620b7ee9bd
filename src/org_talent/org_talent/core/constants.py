"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Roster rescans above this size are refused before any write happens.
DEFAULT_MAX_CASCADE_ROSTER = 5000
DEFAULT_ROSTER_BATCH_SIZE = 500

# Criterion ids whose scores feed the potential estimate.
DEFAULT_POTENTIAL_CRITERIA = (
    "capacidade-aprender",
    "resiliencia-adversidades",
    "pensar-fora-caixa",
)

# Evaluation cycles look like "2025.1" (year.semester).
CYCLE_ID_PATTERN = r"^\d{4}\.[1-9]$"
