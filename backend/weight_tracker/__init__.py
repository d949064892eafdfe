"""
Weight Tracker: weight and body measurement tracking API.
"""
__version__ = "1.0.0"
