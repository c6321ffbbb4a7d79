"""Loading, metric computation and chart rendering for a security pair."""
