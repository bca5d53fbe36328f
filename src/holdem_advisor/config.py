"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Database holding persisted advisor regrets
DB_PATH = Path(os.getenv("HOLDEM_DB_PATH", "holdem_advisor.db"))

# Randomness; unset means a fresh seed per run
_seed = os.getenv("HOLDEM_SEED", "")
SEED = int(_seed) if _seed else None

# Advisor training
TRAINING_ITERATIONS = int(os.getenv("HOLDEM_TRAINING_ITERATIONS", "1000"))
DEFAULT_ADVISOR = os.getenv("HOLDEM_ADVISOR_NAME", "default")

# Table defaults
SEATS = int(os.getenv("HOLDEM_SEATS", "4"))
ANTE = float(os.getenv("HOLDEM_ANTE", "10"))
DEFAULT_RAISE = float(os.getenv("HOLDEM_DEFAULT_RAISE", "20"))
DEFAULT_STACK = float(os.getenv("HOLDEM_DEFAULT_STACK", "500"))

# Logging
LOG_LEVEL = os.getenv("HOLDEM_LOG_LEVEL", "WARNING")
