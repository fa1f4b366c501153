"""Static reference data: drug tables and message templates."""
