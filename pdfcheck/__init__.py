"""
PDF Profile Checker
===================
Decides whether a PDF document conforms to archival compliance profiles
such as PDF/A-1 Level A and Level B.

Architecture:
    - Object Model: Typed view over the pikepdf object graph
    - Profiles: Rule sets evaluated against the object model, with cached results
    - Registry: Builds profile sets in dependency order
    - Engine: Reads document info with PyMuPDF, evaluates the profiles,
      produces a JSON report

Version: 1.0.0
"""

__version__ = "1.0.0"
