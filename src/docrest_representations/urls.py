"""RelativeUrl: immutable path + query string with deterministic output."""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import parse_qsl, quote, quote_plus, urlsplit


def _form_encode(value: str) -> str:
    # application/x-www-form-urlencoded, as produced by browsers' URLSearchParams
    return quote_plus(value, safe="*").replace("~", "%7E")


@dataclass(frozen=True)
class RelativeUrl:
    """A URL reduced to its path, query parameters and fragment.

    ``str()`` sorts parameters by name (stable for repeated names) so that
    equivalent URLs serialize identically.
    """

    path: str = "/"
    params: tuple[tuple[str, str], ...] = ()
    fragment: str = ""

    @classmethod
    def from_string(cls, url: str | RelativeUrl) -> RelativeUrl:
        if isinstance(url, RelativeUrl):
            return url
        parts = urlsplit(url)
        path = parts.path or "/"
        if not path.startswith("/"):
            path = "/" + path
        return cls(
            path=path,
            params=tuple(parse_qsl(parts.query, keep_blank_values=True)),
            fragment=parts.fragment,
        )

    def get_param(self, name: str) -> str | None:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def set_param(self, name: str, value: object) -> RelativeUrl:
        """Replace the first ``name`` parameter and drop the others, or append."""
        out: list[tuple[str, str]] = []
        replaced = False
        for key, current in self.params:
            if key != name:
                out.append((key, current))
            elif not replaced:
                out.append((key, str(value)))
                replaced = True
        if not replaced:
            out.append((name, str(value)))
        return replace(self, params=tuple(out))

    def remove_param(self, name: str) -> RelativeUrl:
        return replace(self, params=tuple(p for p in self.params if p[0] != name))

    def only_keep_params(self, names: list[str] | tuple[str, ...]) -> RelativeUrl:
        return replace(self, params=tuple(p for p in self.params if p[0] in names))

    def clear_params(self) -> RelativeUrl:
        return replace(self, params=())

    def append_path(self, segment: object) -> RelativeUrl:
        return replace(self, path=f"{self.path}/{quote(str(segment), safe='')}")

    def __str__(self) -> str:
        out = self.path
        if self.params:
            ordered = sorted(self.params, key=lambda p: p[0])
            out += "?" + "&".join(
                f"{_form_encode(k)}={_form_encode(v)}" for k, v in ordered
            )
        if self.fragment:
            out += "#" + self.fragment
        return out
