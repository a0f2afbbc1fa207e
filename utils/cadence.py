# utils/cadence.py
"""
Rent cadence normalization.

Leases store the billing frequency as free text, so the same cadence shows up
as "Weekly", "bi-weekly", "every_2_weeks", "mth" and so on. Everything that
needs to reason about frequency goes through normalize_cadence first.
"""
import re
from typing import Literal, Optional

Cadence = Literal["weekly", "biweekly", "monthly"]

WEEKLY = "weekly"
BIWEEKLY = "biweekly"
MONTHLY = "monthly"

# Checked in order, first match wins
_PATTERNS = (
     (WEEKLY, re.compile(r"^(weekly|week($| )|every week)")),
     (BIWEEKLY, re.compile(r"^(bi ?weekly|every 2 weeks|fortnight)")),
     (MONTHLY, re.compile(r"^(monthly|month|mo|mth|every month)")),
)


def _clean(raw) -> str:
     s = str(raw).strip().lower()
     s = re.sub(r"[_-]", " ", s)
     return re.sub(r"\s+", " ", s).strip()


def normalize_cadence(raw) -> Optional[Cadence]:
     """
     Map a free-text cadence to "weekly", "biweekly", "monthly" or None.

     Never raises; None and unrecognized text both give None.
     """
     if raw is None:
          return None
     s = _clean(raw)
     if not s:
          return None
     for cadence, pattern in _PATTERNS:
          if pattern.match(s):
               return cadence
     if "month" in s:
          return MONTHLY
     return None
