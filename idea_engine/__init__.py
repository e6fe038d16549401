"""Hot-topic idea pipeline: orchestration and console entry points."""

__version__ = "0.1.0"
