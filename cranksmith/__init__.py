"""CrankSmith drivetrain performance, compatibility and bike-fit engine."""

__version__ = "0.1.0"
