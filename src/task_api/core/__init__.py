"""Task scheduling rules, query planning and pagination."""
