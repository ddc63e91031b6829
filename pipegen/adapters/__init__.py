"""
Adapters — wrappers around external tools pipegen consults.

Only the git CLI today (remote URL, default branch, repository root).
"""
