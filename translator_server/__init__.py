"""
Translator sync server: training data collection and model update checks
for the English/Myanmar translator client.
"""

__version__ = "1.0.0"
