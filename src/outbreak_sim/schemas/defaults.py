"""Default parameter values for the Outbreak Cure Simulator.

These constants are used as `Field(default=...)` values in the Pydantic
config schemas.  They live here (in the schemas layer) rather than in
`core` so that `schemas` does not depend on `core`.

All rates are expressed PER IN-GAME HOUR and all levels are normalized
to the unit interval [0, 1].  Currency is the in-game "zar" (R) unit.
"""

# =============================================================================
# TIME SCALING REFERENCE
# =============================================================================
# The external clock reports elapsed in-game MINUTES; the engine converts
# them to HOURS before applying any rate below.
#
#   1 in-game day = 24 hours = 1440 minutes
#   Day index starts at 1 on the first day of a run.
#
# Virus strength ramps linearly with the day index:
#   strength(day) = 1 + daily_virus_growth * (day - 1)
#   e.g. growth=0.06 -> day 1: 1.00x, day 11: 1.60x, day 21: 2.20x
# =============================================================================

MINUTES_PER_HOUR = 60.0
MINUTES_PER_DAY = 1440

# --- Virus Defaults ---
# An untreated province with no outposts saturates in ~80 hours on day 1
# (1 / 0.0125), faster as the virus strengthens.
DEFAULT_BASE_INFECTION_PER_HOUR = 0.0125
DEFAULT_DAILY_VIRUS_GROWTH = 0.06  # +6% infection speed per elapsed day
DEFAULT_OUTPOST_DISABLE_THRESHOLD = 0.8  # outposts go dark at/above 80%
DEFAULT_FULLY_INFECTED_THRESHOLD = 0.99  # province counts as lost at 99%

# --- Outpost Rate Defaults ---
# One active outpost more than cancels the base infection rate locally.
DEFAULT_LOCAL_CURE_PER_HOUR = 0.02
# Contribution of a single (undiscounted) outpost to the global cure meter.
DEFAULT_GLOBAL_CURE_PER_HOUR_PER_OUTPOST = 0.0012
# Each successive outpost (in global build order) is worth 85% of the last:
#   multiplier(i) = factor ^ i
DEFAULT_DIMINISHING_RETURN_FACTOR = 0.85
DEFAULT_BONUS_MULTIPLIER = 1.5  # research hubs boost global contribution
DEFAULT_BONUS_REGION_IDS: tuple[str, ...] = ("GP", "WC")
# Balancing window: a well-played run should be won between these days.
DEFAULT_TARGET_WIN_DAY_MIN = 10.0
DEFAULT_TARGET_WIN_DAY_MAX = 14.0

# --- Cost Defaults ---
# cost(n) = base + per_existing * n, where n = outposts already built
DEFAULT_OUTPOST_BASE_COST = 20  # R: first outpost
DEFAULT_OUTPOST_COST_PER_EXISTING = 8  # R: surcharge per existing outpost

# --- Infection Seeding Defaults ---
# Each province starts with infection drawn from uniform(min, max).
# Set min == max for a fixed, deterministic seed.
DEFAULT_SEED_INFECTION_MIN = 0.05
DEFAULT_SEED_INFECTION_MAX = 0.2

# --- Clock (driver) Defaults ---
DEFAULT_MINUTES_PER_STEP = 60  # one tick = one in-game hour
DEFAULT_MAX_DAYS = 30  # give up if neither side has won by then

# --- Scenario Defaults ---
DEFAULT_STARTING_CURRENCY = 200  # R
BONUS_TAG = "bonus"

# The nine provinces of South Africa: (region_id, display_name)
DEFAULT_REGIONS: tuple[tuple[str, str], ...] = (
    ("EC", "Eastern Cape"),
    ("FS", "Free State"),
    ("GP", "Gauteng"),
    ("KZN", "KwaZulu-Natal"),
    ("LP", "Limpopo"),
    ("MP", "Mpumalanga"),
    ("NC", "Northern Cape"),
    ("NW", "North West"),
    ("WC", "Western Cape"),
)
