"""
Contact submission domain: payload models, validation and email bodies.
"""
