from trafficmonitor.validators.origin import (
    AuthMechanismOriginValidator,
    IpAddressOriginValidator,
    UsageRecordOriginValidator,
    UserAgentOriginValidator,
)

__all__ = [
    "AuthMechanismOriginValidator",
    "IpAddressOriginValidator",
    "UsageRecordOriginValidator",
    "UserAgentOriginValidator",
]
