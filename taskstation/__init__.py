"""Task Station: task tracking API with SLA monitoring."""

__version__ = "1.0.0"
