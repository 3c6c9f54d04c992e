"""Chronos.

A personal time-booking assistant:
- credentials resolved from env var, config file or the OS keyring
- a local JSON cache of bookable customer/project/task entries
- time entries composed from favorites and submitted to CoffeeCup
"""

__version__ = "0.1.0"

from chronos.settings import ChronosSettings

__all__ = ["__version__", "ChronosSettings"]
