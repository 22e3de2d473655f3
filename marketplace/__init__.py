"""Marketplace API - vendor onboarding and verification backend."""
