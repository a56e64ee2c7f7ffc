"""VS competition services: week and score reconciliation plus read projections.

Routes import from here, keeping transport concerns out of the
natural-key upsert rules.
"""
