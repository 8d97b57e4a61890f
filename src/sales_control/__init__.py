"""
Sales Control - Daily Sales Reporting Pipeline

Commission computation, sales listings with a cache-aside read path, daily
aggregate reports and the scheduled jobs that e-mail them to administrators
and to each seller.
"""

__version__ = "0.1.0"

# Package metadata
__all__ = [
    "__version__",
]
