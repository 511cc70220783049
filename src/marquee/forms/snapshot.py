"""Form snapshots — point-in-time capture of form field values.

Implements ``Mapping[str, str]`` so a snapshot can be passed straight to
``marquee.validation.evaluate``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from marquee.dom import FormElement


class FormSnapshot(Mapping[str, str]):
    """Immutable field name → value mapping captured at submit time.

    Usage::

        snapshot = FormSnapshot.capture(form)
        verdict = evaluate(rules, snapshot)
        payload = snapshot.to_payload()
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        object.__setattr__(self, "_data", {k: str(v) for k, v in (data or {}).items()})

    @classmethod
    def capture(cls, form: FormElement) -> FormSnapshot:
        """Read every named control of *form*."""
        return cls(form.values())

    def to_payload(self) -> dict[str, str]:
        """A fresh JSON-serializable copy for the submission request."""
        return dict(self._data)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormSnapshot({{{items}}})"
