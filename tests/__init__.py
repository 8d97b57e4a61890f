"""
Test Package for Sales Control
Unit and integration tests over SQLite in memory and mocked brokers.
"""
