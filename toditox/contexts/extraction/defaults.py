"""
Default values for extracted records.

Provides shared defaults used by:
- structured_parser.py (new task records, ownership checks)
- fallback_parser.py (section-based assignee)
- generation/prompts.py (default owner named in the instruction contract)

The default identity is read from the environment at call time so a
deployment (or a test) can change it without reloading modules.
"""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ASSIGNEE = "Pablo"
DEFAULT_ASSIGNEE_ALIAS = "me"

# Assignee used for items listed under a team heading
TEAM_ASSIGNEE = "Team"

DEFAULT_STATUS = "todo"

# Category (energy) ids; grammar labels map onto these
CATEGORY_IDS = ("vendor", "design", "coordination", "procurement", "onsite", "dev", "admin")

# Display labels used when writing the grammar back out
CATEGORY_LABELS = {
    "vendor": "Vendor",
    "design": "Design",
    "coordination": "Coordination",
    "procurement": "Procurement",
    "onsite": "On-site",
    "dev": "Dev",
    "admin": "Admin",
}

PRIORITY_IDS = ("high", "medium", "low")


def get_default_assignee() -> str:
    """Configured default identity (TODITOX_DEFAULT_ASSIGNEE)."""
    return os.getenv("TODITOX_DEFAULT_ASSIGNEE") or DEFAULT_ASSIGNEE


def get_assignee_alias() -> str:
    """Alias that also refers to the default identity (TODITOX_ASSIGNEE_ALIAS)."""
    return os.getenv("TODITOX_ASSIGNEE_ALIAS") or DEFAULT_ASSIGNEE_ALIAS
