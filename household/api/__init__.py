"""HTTP API for households, their ledgers and the monthly settlement."""
