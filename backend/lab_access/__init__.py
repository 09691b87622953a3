"""AI Robotics Lab access management backend."""

__version__ = "1.0.0"
