"""Implementation package; import public names from ``bwdelaunay`` instead."""
