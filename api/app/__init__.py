"""Valuation GraphQL API."""
