"""gtd - a small flat-file task tracker."""

__version__ = "0.1.0"
