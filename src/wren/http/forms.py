"""Submitted form parsing: URL-encoded and multipart bodies to raw answers.

``FormData`` is an immutable multi-value mapping (implements
``MultiValueMapping``). ``answers_from_form()`` reads one into the raw
answer dict a ``FormValidator`` expects: checkbox groups and multiple
selects become lists, every other field takes its first value::

    form = parse_form_data(body, request.headers["content-type"])
    result = validator.validate(answers_from_form(form, definition))

``python-multipart`` is an optional dependency (``pip install wren[forms]``).
URL-encoded forms use stdlib ``urllib.parse`` with no extra dependency.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from wren._internal.multimap import MultiValueMapping
from wren.definition import FormDefinition


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Uploaded files are not kept: no field kind takes a file answer.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]]) -> None:
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def answers_from_form(form: MultiValueMapping, definition: FormDefinition) -> dict[str, Any]:
    """Extract raw answers for every field in *definition*.

    List-shaped fields (checkbox groups, multiple selects) take all
    values for their id; an id that was never posted maps to ``None``,
    which the validator treats as an untouched control. Other fields
    take their first value.

    Args:
        form: ``FormData`` or any ``MultiValueMapping``.
        definition: The form the submission answers.

    Returns:
        A dict of field ids to raw answers, ready for ``validate()``.
    """
    answers: dict[str, Any] = {}
    for f in definition.fields:
        if f.id not in form:
            answers[f.id] = None
        elif f.list_shaped:
            answers[f.id] = form.get_list(f.id)
        else:
            answers[f.id] = form.get(f.id)
    return answers


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Parsed FormData instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If content type is not a supported form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data using stdlib."""
    from urllib.parse import parse_qs

    parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    return FormData(parsed)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Collect the text parts of a multipart body by name.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    File parts are discarded.
    """
    from wren.errors import ConfigurationError

    try:
        from python_multipart.multipart import FormParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install wren[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}

    def on_field(part: Any) -> None:
        name = part.field_name.decode("utf-8")
        value = (part.value or b"").decode("utf-8", errors="replace")
        data.setdefault(name, []).append(value)

    def on_file(part: Any) -> None:
        part.close()

    parser = FormParser("multipart/form-data", on_field, on_file, boundary=boundary)
    parser.write(body)
    parser.finalize()
    return FormData(data)
