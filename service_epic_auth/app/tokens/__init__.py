"""
Compact JWT decoding helpers.
"""
