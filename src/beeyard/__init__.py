"""beeyard: apiary, hive and sensor record persistence."""

__version__ = "0.1.0"
