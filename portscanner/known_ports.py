from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

UNKNOWN = "<unknown>"

KNOWN_PORTS: Mapping[int, str] = MappingProxyType({
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    66: "Oracle SQL*NET?",
    69: "TFTP",
    80: "HTTP",
    88: "Kerberos",
    109: "POP2",
    110: "POP3",
    118: "SQL Service?",
    123: "NTP",
    137: "NetBIOS",
    139: "NetBIOS",
    143: "IMAP",
    150: "SQL-Net?",
    194: "IRC",
    443: "HTTPS",
    445: "Samba",
    465: "SMTP over SSL",
    554: "RTSP",
    5800: "VNC Remote Desktop",
    631: "CUPS",
    993: "IMAP over SSL",
    995: "POP3 over SSL",
    1433: "Microsoft SQL Server",
    1434: "Microsoft SQL Monitor",
    3306: "MySQL",
    3389: "Remote Desktop Protocol (RDP)",
    3396: "Novell NDPS Printer Agent",
    3535: "SMTP (Alternate)",
    5432: "PostgreSQL",
    6379: "Redis",
    8080: "HTTP Alternate",
    9160: "Cassandra",
    9200: "Elasticsearch",
    11211: "Memcached",
    27017: "MongoDB",
    28017: "MongoDB Web Admin",
})


def lookup(port: int) -> str:
    return KNOWN_PORTS.get(port, UNKNOWN)
