"""MindPath: behavioral well-being insights and career guidance from free text."""

__version__ = "0.1.0"
