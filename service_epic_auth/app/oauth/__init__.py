"""
OAuth2 authorization-code helpers for the Epic identity provider.
"""
