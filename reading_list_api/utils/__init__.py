"""
Utilities Package

Helper functions used across the application:
- isbn.py: ISBN-10/ISBN-13 normalization and check-digit validation
"""
