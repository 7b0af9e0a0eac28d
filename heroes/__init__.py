"""Data-access client for the Tour of Heroes API."""
