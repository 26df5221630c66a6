"""
trafficmonitor/enums.py
Enumerations for scan parameters.

The values match the text accepted by the pipeline task inputs
(``timePeriod``, ``userOrigin``, ``targetAuthMechanism``).
"""

from __future__ import annotations

from enum import Enum


class ScanTimePeriod(str, Enum):
    PRIOR_DAY = "priorDay"          # the entirety of yesterday (UTC)
    LAST_24_HOURS = "last24Hours"   # the preceding 24 hours


class UserOrigin(str, Enum):
    AAD = "aad"
    ALL = "all"


class AuthMechanism(str, Enum):
    ANY = "any"
    PAT = "pat"
