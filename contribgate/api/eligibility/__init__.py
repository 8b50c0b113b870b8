"""Eligibility check resource."""
