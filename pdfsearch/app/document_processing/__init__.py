"""
Page-text indexing and phrase matching.
"""
