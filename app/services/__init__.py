"""
Services Package

Business logic that is separate from HTTP handling and reusable across
the application.

Current services:
- security.py: Password hashing and JWT access tokens with role claims
"""
