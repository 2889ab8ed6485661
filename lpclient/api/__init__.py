"""HTTP surface for the pool client."""
