"""Mission Control: personal missions, milestones, progress logs and watchers."""

__version__ = "0.1.0"
