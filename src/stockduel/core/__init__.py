"""Configuration and the load-compute-emit pipeline."""
