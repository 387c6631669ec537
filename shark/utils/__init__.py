"""String, file and host utilities."""

from shark.utils.files import FileOpenError, open_file
from shark.utils.host import gethostname
from shark.utils.strings import empty_or_comment, lower, tokenize, trim, upper

__all__ = [
    "FileOpenError",
    "empty_or_comment",
    "gethostname",
    "lower",
    "open_file",
    "tokenize",
    "trim",
    "upper",
]
