"""pxpr: a command-line arithmetic and boolean expression evaluator."""

__version__ = "0.1.0"
