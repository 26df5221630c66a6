from trafficmonitor.services.usage_service import UtilizationApiUsageService
from trafficmonitor.services.user_service import GraphApiUserService

__all__ = ["GraphApiUserService", "UtilizationApiUsageService"]
