from trafficmonitor.rules.out_of_range_ip_address_rule import OutOfRangeIpAddressScannerRule

__all__ = ["OutOfRangeIpAddressScannerRule"]
