"""
Saved-places travel recommender.

Turns a saved-places export into a travel preference profile and asks an
LLM for places to visit at a verified destination.
"""
