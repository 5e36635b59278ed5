"""mkvsame - pick common default audio and subtitle tracks across MKV files."""

__version__ = "0.1.0"
