"""A small interactive command shell with pipelines, background jobs, history and timing reports."""

__version__ = "0.1.0"
__all__ = ["colors", "parsing", "shell", "fib", "hello"]