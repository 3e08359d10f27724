"""
HTTP API for the listing extractor.
"""
