from importlib import metadata

try:
    __version__ = metadata.version("loancap")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    from loancap import __version__
