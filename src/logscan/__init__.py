"""Ad-hoc analysis of plain-text logs: severity counts, IPv4 ranking, line filtering."""

__version__ = "0.1.0"
