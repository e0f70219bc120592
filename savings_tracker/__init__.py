"""
Savings Tracker - Personal Savings Goal Tool.

Records a savings goal and a running balance, persists both locally and
renders a segmented progress bar towards the goal.

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Savings Tracker Team"
