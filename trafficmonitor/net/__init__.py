from trafficmonitor.net.client import VstsHttpClient

__all__ = ["VstsHttpClient"]
