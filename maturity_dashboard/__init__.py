"""
Core package for the automation maturity dashboard.

Submodules provide sheet import, parsing, merging, persistence, and user
interface rendering helpers that are orchestrated by the top-level `app.py`.
"""
