"""Scoring module for the MDR Score Engine.

Implements the complete MDR scoring pipeline:
  Honor Classifier + Impact Normalizer → Four Pillars → MDR Score
  → Tier Gatekeeper (categorical re-validation)
"""
