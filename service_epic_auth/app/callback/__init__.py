"""
OAuth callback pipeline.
"""
