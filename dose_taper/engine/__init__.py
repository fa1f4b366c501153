"""Pure computation stages of the tapering engine."""
