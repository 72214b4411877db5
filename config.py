# config.py
# Paths, fixed costs & import defaults (no sample data)

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.getenv("BUDGET_DATA_DIR", BASE_DIR / "data"))

STATE_FILE = DATA_DIR / "spending_app_data_v1.json"

# Fixed weekly costs (not user-configurable)
GAS_COST = 70000
WIFI_COST = 30000
FIXED_EXPENSES = GAS_COST + WIFI_COST

# Budgets used when the stored blob has none
DEFAULT_FOOD_BUDGET = 315000
DEFAULT_MISC_BUDGET = 100000

# Cadence thresholds (days)
REFUEL_SHORT_INTERVAL_DAYS = 5
WIFI_CYCLE_DAYS = 7
WIFI_WARNING_DAYS = 6
URGENT_DUE_DAYS = 3
