from os import PathLike, fspath
from os.path import isfile, splitext
from urllib.parse import urlparse


TEMPLATE_EXTENSIONS = (".html", ".htm", ".j2", ".jinja", ".jinja2")


def validate_path(path: "str | PathLike[str]") -> str:
    """Checks that `path` names an existing regular file.

    Args:
        path (str | PathLike): Path to validate.

    Returns:
        str: The path as a string.

    Raises:
        ValueError: If `path` is not a string or path-like object.
        FileNotFoundError: If no file exists at `path`.
    """
    if not isinstance(path, (str, PathLike)):
        raise ValueError("File path must be a string or path-like object.")
    path = fspath(path)
    if not path:
        raise ValueError("File path must not be empty.")
    if not isfile(path):
        raise FileNotFoundError(f"File not found: {path}")
    return path


def validate_template(file: "str | PathLike[str]") -> str:
    """Checks that `file` is an existing HTML or Jinja2 template.

    Raises:
        ValueError: If the extension is not a template extension.
        FileNotFoundError: If the file does not exist.
    """
    path = validate_path(file)
    if splitext(path)[1].lower() not in TEMPLATE_EXTENSIONS:
        raise ValueError(f"Template must be an HTML file: {path}")
    return path


def validate_api_config(base_uri: str | None, token: str | None) -> None:
    """Checks the relay address and API token.

    Raises:
        ValueError: If either value is missing, or the address is not an
            http(s) URL with a host.
    """
    if not base_uri or not isinstance(base_uri, str):
        raise ValueError("Postal base URI is required.")
    if not token or not isinstance(token, str):
        raise ValueError("Postal API token is required.")

    parsed = urlparse(base_uri)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Postal base URI must be an http(s) URL, got {base_uri!r}.")
