"""Configuration package.

Note: Do not import and construct settings at package import time. Import
from ``catalog.config.settings`` directly where needed.
"""

__all__: list[str] = []
