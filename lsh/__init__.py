"""lsh: an interactive command interpreter with a raw-mode line editor."""

__version__ = "0.1.0"


def main(argv=None):
    from .cli import main as _main

    return _main(argv)


__all__ = ["main", "__version__"]
