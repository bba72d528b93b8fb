class LoadError(IOError):
    """The input file could not be read completely."""


class FormatError(Exception):
    """No usable MPEG audio data in the input."""
