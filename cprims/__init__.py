"""C-style memory, string and bit routines, a reduced printf and an ASL-style log client."""

__version__ = "0.1.0"
__all__ = ["asl", "bits", "environ", "memory", "simple_string", "strings"]