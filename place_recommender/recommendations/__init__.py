"""
Recommendation orchestration.

Responsibilities:
- Decide which capabilities and instructions a completion request carries.
- Keep per-session state: profile, verified destination, results.
- Extend result sets on "load more" without repeating places.
"""
