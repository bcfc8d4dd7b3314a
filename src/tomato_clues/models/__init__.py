"""tomato-clues domain models."""
