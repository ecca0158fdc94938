"""
Legal Consultation Engine

AI legal consultation for law firms: retrieval of Saudi legal references,
layered prompt context, Claude-generated answers, heuristic validation and
lawyer-feedback enhancement.
"""

__version__ = "1.0.0"
__author__ = "Legal AI Team"
__description__ = "AI legal consultation engine with firm and lawyer personalization"
