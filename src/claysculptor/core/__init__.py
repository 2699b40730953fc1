"""
Core modules for claysculptor.

This package contains the core business logic for:
- Configuration management
- Prompt construction and filenames
- The retried generation client and its backends
- The sculptor agent
"""
