"""civicscan: duplicate detection and triage for citizen-submitted issue reports."""

__version__ = "0.1.0"
