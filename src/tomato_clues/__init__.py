"""tomato-clues - adaptive focus pulses in the terminal."""

__version__ = "0.1.0"
