"""Credential and storage configuration core for the SaaS admin console."""

__version__ = "0.1.0"
