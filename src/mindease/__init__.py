"""
MindEase - Conversational Support Assistant

This package provides the conversation core for the MindEase platform:
session management, crisis detection, emotion analysis and
rule-based response selection, plus a thin HTTP transport.

IMPORTANT: Crisis copy returned by this package is user-facing
safety text. Do not edit reply templates without review.
"""

__version__ = "0.1.0"
__author__ = "MindEase Engineering Team"
