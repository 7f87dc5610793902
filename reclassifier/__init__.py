"""Catalog taxonomy reclassifier.

Harvests textual evidence from product rows, decides category, subcategory
and gender corrections, and queues them as pending review proposals through
the auto-reseed batch lifecycle.
"""
