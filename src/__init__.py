"""
Facility Congestion Predictor

Trains a random forest of randomized decision trees on health-facility
attendance records and predicts congestion by majority vote.
"""

__version__ = "1.0.0"
