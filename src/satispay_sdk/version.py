"""Version information for Satispay Python SDK"""

__version__ = "1.4.1"
