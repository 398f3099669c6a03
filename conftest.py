"""
Shared pytest setup: charts render headless.
"""

import matplotlib

matplotlib.use("Agg")
