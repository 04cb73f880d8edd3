"""Verification services: orchestration and reporting."""
