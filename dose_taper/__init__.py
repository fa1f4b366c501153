"""Clinical dose-tapering and drug-equivalence engine."""

__version__ = "0.1.0"
