"""
Services Package

Clients for data sources outside the database:
- reviews.py: NYT Books review API client
"""
