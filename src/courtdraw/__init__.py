"""Court Draw: fair random team draws for badminton club nights."""

__version__ = "1.0.0"
