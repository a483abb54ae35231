import os

from git_bump.errors import FileIOError, FileIOErrorKind


def is_readable_file(path) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def read_file_contents(filename):
    try:
        with open(filename, encoding="utf-8", newline="") as fp:
            return fp.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(FileIOErrorKind.READ_ERROR, filename, e) from e


def write_file_contents(filename, content):
    # newline="" keeps the line endings exactly as the transform returned them
    try:
        with open(filename, "w", encoding="utf-8", newline="") as fp:
            fp.write(content)
    except OSError as e:
        raise FileIOError(FileIOErrorKind.WRITE_ERROR, filename, e) from e
