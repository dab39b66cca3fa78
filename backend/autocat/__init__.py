"""Rule-based transaction auto-categorization."""
