"""Report content, calculation records and export."""
