"""Shared utilities for claysculptor."""
