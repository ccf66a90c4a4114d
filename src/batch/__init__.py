"""Candidate discovery, bundle preparation and batch orchestration."""
