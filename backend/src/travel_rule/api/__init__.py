"""HTTP surface for the travel rule calculator."""
