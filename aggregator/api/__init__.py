"""HTTP API for the swap aggregator."""
