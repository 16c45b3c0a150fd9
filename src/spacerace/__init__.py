"""SPACE RACE - lane-dodging arcade game."""

__version__ = "0.1.0"
