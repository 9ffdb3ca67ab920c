"""
Core domain: exceptions and payload validation shared by the store and API.
"""
