"""Deterministic genesis extraData and constructor parameters for validator-set bootstrapping."""
