"""
Scout - Sponsor prospecting forensics

Field-level provenance, identity resolution and multi-source merging
for discovered sponsorship leads.
"""

__version__ = "0.1.0"
