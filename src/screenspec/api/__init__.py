"""HTTP host for remote view layers."""
