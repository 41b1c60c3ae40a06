"""Financial-year customer metrics dashboard.

Normalizes a CSV export of customer metrics grouped by financial year and
serves the ranked views behind the dashboard charts.
"""

__version__ = "0.1.0"
