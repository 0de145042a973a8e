"""Core domain logic for personal health tracking.

This package contains the validation rules, derived health metrics and
check-in streak logic, isolated from storage and transport for easy testing.
"""
