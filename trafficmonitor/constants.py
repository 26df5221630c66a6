# trafficmonitor/constants.py
# Fixed values of the VSTS ecosystem used by the origin validators and services.

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# Graph subject type of users sourced from Azure AD
# ---------------------------------------------------------------------------

AAD_GRAPH_SUBJECT_TYPE = "aad"          # Azure AD user

# ---------------------------------------------------------------------------
# Known VSTS egress IP addresses, per region.
# A curated subset only; the full list changes too often to maintain here.
# ---------------------------------------------------------------------------

IP_ADDRESS_AUSTRALIA_EAST = "13.75.145.145"
IP_ADDRESS_BRAZIL_SOUTH = "191.232.37.247"
IP_ADDRESS_CANADA_CENTRAL = "52.237.19.6"
IP_ADDRESS_CENTRAL_US = "13.89.236.72"
IP_ADDRESS_EAST_ASIA = "52.175.28.40"
IP_ADDRESS_INDIA_SOUTH = "104.211.227.29"
IP_ADDRESS_WEST_EUROPE = "40.68.34.220"

KNOWN_VSTS_IP_ADDRESSES: Tuple[str, ...] = (
    IP_ADDRESS_AUSTRALIA_EAST,
    IP_ADDRESS_BRAZIL_SOUTH,
    IP_ADDRESS_CANADA_CENTRAL,
    IP_ADDRESS_CENTRAL_US,
    IP_ADDRESS_EAST_ASIA,
    IP_ADDRESS_INDIA_SOUTH,
    IP_ADDRESS_WEST_EUROPE,
)

# ---------------------------------------------------------------------------
# Internal service-to-service call markers
# ---------------------------------------------------------------------------

AUTH_MECHANISM_SERVICE_TO_SERVICE = "S2S_ServicePrincipal"
USER_AGENT_PREFIX_SERVICE_TO_SERVICE = "VSServices"

# Prefix (case-insensitive) of authenticationMechanism values for PAT traffic,
# e.g. "PAT_Scoped", "PAT_Unscoped".
AUTH_MECHANISM_PAT_PREFIX = "pat"
